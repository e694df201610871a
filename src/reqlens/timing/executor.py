"""Timed HTTP request execution."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

import httpx

from ..errors import TransportError
from ..request import RequestConfig, parse_target, validate_headers
from .models import ExecutionStage, ResponseRecord
from .probe import PROBE_TIMEOUT, PhaseProbe
from .timer import RequestTimer, now_ms

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

# Split of the measured request duration into estimated sub-phases
FIRST_BYTE_RATIO = 0.7
DOWNLOAD_RATIO = 0.3
WAIT_OFFSET_RATIO = 0.1

StageCallback = Callable[[ExecutionStage], None]


def estimate_transfer_phases(request_ms: float) -> dict[str, float]:
    """Derive request sub-phases from one measured duration.

    These are fixed-ratio estimates, not observed values:
    first_byte = 70%, download = 30%, waiting = first_byte - 10%.
    """
    first_byte = request_ms * FIRST_BYTE_RATIO
    return {
        "request": request_ms,
        "first_byte": first_byte,
        "download": request_ms * DOWNLOAD_RATIO,
        "waiting": first_byte - request_ms * WAIT_OFFSET_RATIO,
    }


def decode_body(response: httpx.Response) -> Any:
    """Parse a JSON body when the content type says so, else return text."""
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
            pass
    return response.text


class TimedRequestExecutor:
    """Runs the DNS -> TCP -> TLS probes, then the real request.

    Wraps httpx the same way for every request and takes the probe as a
    collaborator so both can be mocked in tests.
    """

    def __init__(
        self,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        probe_timeout: float = PROBE_TIMEOUT,
        verify_ssl: bool = True,
        proxy: Optional[str] = None,
        follow_redirects: bool = False,
        probe: Optional[PhaseProbe] = None,
        on_stage: Optional[StageCallback] = None,
    ) -> None:
        self._timeout = timeout
        self._probe_timeout = probe_timeout
        self._verify_ssl = verify_ssl
        self._proxy = proxy
        self._follow_redirects = follow_redirects
        self._probe = probe or PhaseProbe()
        self._on_stage = on_stage
        self.stage = ExecutionStage.IDLE

    def _enter(self, stage: ExecutionStage) -> None:
        logger.debug("stage %s -> %s", self.stage.value, stage.value)
        self.stage = stage
        if self._on_stage is not None:
            self._on_stage(stage)

    def execute(self, config: RequestConfig) -> ResponseRecord:
        """Send the request and return the response with its timing.

        Args:
            config: The request to send

        Returns:
            ResponseRecord for any HTTP status, 4xx and 5xx included

        Raises:
            InvalidUrlError: Before any network activity if the URL is bad
            InvalidRequestError: Before any network activity if a header
                cannot be encoded
            TransportError: If the real request fails below HTTP; carries
                the partial timing snapshot
        """
        self.stage = ExecutionStage.IDLE
        target = parse_target(config.url)
        validate_headers(config.headers)
        timer = RequestTimer().start()

        self._enter(ExecutionStage.RESOLVING)
        timer.set_phase("dns", self._probe.measure_dns(target.hostname))

        self._enter(ExecutionStage.CONNECTING)
        timer.set_phase(
            "tcp",
            self._probe.measure_tcp(target.hostname, target.port, self._probe_timeout),
        )

        if target.secure:
            self._enter(ExecutionStage.HANDSHAKING)
            timer.set_phase(
                "tls",
                self._probe.measure_tls(target.hostname, target.port, self._probe_timeout),
            )
        else:
            timer.set_phase("tls", 0)

        self._enter(ExecutionStage.REQUESTING)
        request_start = now_ms()
        try:
            response = self._send(config)
        except httpx.RequestError as e:
            timer.end()
            self._enter(ExecutionStage.FAILED)
            logger.warning("%s %s failed: %s", config.method, config.full_url, e)
            raise TransportError(
                str(e) or type(e).__name__,
                timing=timer.snapshot(),
                cause=e,
            ) from e
        request_ms = now_ms() - request_start

        timer.end()
        for name, value in estimate_transfer_phases(request_ms).items():
            timer.set_phase(name, value)
        self._enter(ExecutionStage.DONE)

        return ResponseRecord(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers={k.lower(): v for k, v in response.headers.items()},
            data=decode_body(response),
            timing=timer.snapshot(),
            url=str(response.url),
            http_version=response.http_version,
        )

    def _send(self, config: RequestConfig) -> httpx.Response:
        """Issue the real request. Never raises for HTTP status codes."""
        body: dict[str, Any] = {}
        if isinstance(config.data, (dict, list)):
            body["json"] = config.data
        elif isinstance(config.data, str):
            if config.has_body:
                body["content"] = config.data
        elif config.data is not None:
            body["content"] = json.dumps(config.data)

        with httpx.Client(
            timeout=self._timeout,
            verify=self._verify_ssl,
            proxy=self._proxy,
            follow_redirects=self._follow_redirects,
        ) as client:
            response = client.request(
                method=config.method,
                url=config.full_url,
                headers=config.headers,
                **body,
            )
            # Read inside the client so streaming bodies are complete
            response.read()
        return response
