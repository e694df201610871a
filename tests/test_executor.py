"""Tests for the timed request executor (with mocked httpx and probes)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from reqlens.errors import InvalidRequestError, InvalidUrlError, TransportError
from reqlens.request import RequestConfig, build_request_config, parse_body
from reqlens.timing import ExecutionStage, TimedRequestExecutor, estimate_transfer_phases
from reqlens.timing.executor import decode_body

_REAL_CLIENT = httpx.Client


def _mock_probe(dns=10.0, tcp=20.0, tls=30.0) -> MagicMock:
    probe = MagicMock()
    probe.measure_dns.return_value = dns
    probe.measure_tcp.return_value = tcp
    probe.measure_tls.return_value = tls
    return probe


def _mock_response(status=200, reason="OK", headers=None, content=b'{"id": 1}',
                   json_data=None, text=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.reason_phrase = reason
    response.headers = headers if headers is not None else {"Content-Type": "application/json"}
    response.content = content
    response.text = text if text is not None else content.decode("utf-8")
    response.json.return_value = json_data if json_data is not None else {"id": 1}
    response.url = "https://api.example.com/users/1"
    response.http_version = "HTTP/1.1"
    return response


def _mock_client(mock_client_cls: MagicMock, response=None, error=None) -> MagicMock:
    mock_client = MagicMock()
    mock_client.__enter__ = MagicMock(return_value=mock_client)
    mock_client.__exit__ = MagicMock(return_value=False)
    if error is not None:
        mock_client.request.side_effect = error
    else:
        mock_client.request.return_value = response
    mock_client_cls.return_value = mock_client
    return mock_client


class TestEstimateTransferPhases:
    def test_ratios(self):
        phases = estimate_transfer_phases(100.0)
        assert phases["request"] == pytest.approx(100.0)
        assert phases["first_byte"] == pytest.approx(70.0)
        assert phases["download"] == pytest.approx(30.0)
        assert phases["waiting"] == pytest.approx(60.0)

    def test_zero(self):
        phases = estimate_transfer_phases(0.0)
        assert all(v == 0 for v in phases.values())


class TestDecodeBody:
    def test_empty(self):
        response = MagicMock()
        response.content = b""
        assert decode_body(response) is None

    def test_json(self):
        response = _mock_response(headers={"content-type": "application/json"})
        assert decode_body(response) == {"id": 1}

    def test_invalid_json_falls_back_to_text(self):
        response = _mock_response(content=b"not json", headers={"content-type": "application/json"})
        response.json.side_effect = ValueError("bad json")
        assert decode_body(response) == "not json"

    def test_text(self):
        response = _mock_response(content=b"<html></html>", headers={"content-type": "text/html"})
        assert decode_body(response) == "<html></html>"
        response.json.assert_not_called()


class TestTimedRequestExecutor:
    """Test the probe-then-request pipeline."""

    @patch("reqlens.timing.executor.httpx.Client")
    def test_https_request(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls, _mock_response())
        probe = _mock_probe()
        executor = TimedRequestExecutor(probe=probe)

        record = executor.execute(RequestConfig(url="https://api.example.com/users/1"))

        assert record.status == 200
        assert record.status_text == "OK"
        assert record.data == {"id": 1}
        assert record.headers == {"content-type": "application/json"}
        assert record.http_version == "HTTP/1.1"
        assert record.url == "https://api.example.com/users/1"
        assert record.timing.phase("dns") == 10.0
        assert record.timing.phase("tcp") == 20.0
        assert record.timing.phase("tls") == 30.0
        assert record.timing.total == record.timing.end - record.timing.start
        assert record.timing.total >= 0
        assert executor.stage is ExecutionStage.DONE

        probe.measure_dns.assert_called_once_with("api.example.com")
        probe.measure_tcp.assert_called_once_with("api.example.com", 443, 5.0)
        probe.measure_tls.assert_called_once_with("api.example.com", 443, 5.0)
        mock_client.request.assert_called_once()

    @patch("reqlens.timing.executor.httpx.Client")
    def test_estimated_phases_follow_ratios(self, mock_client_cls):
        _mock_client(mock_client_cls, _mock_response())
        record = TimedRequestExecutor(probe=_mock_probe()).execute(
            RequestConfig(url="https://api.example.com/")
        )
        timing = record.timing
        request_ms = timing.phase("request")
        assert request_ms >= 0
        assert timing.phase("first_byte") == pytest.approx(request_ms * 0.7)
        assert timing.phase("download") == pytest.approx(request_ms * 0.3)
        assert timing.phase("waiting") == pytest.approx(request_ms * 0.6)

    @patch("reqlens.timing.executor.httpx.Client")
    def test_http_skips_tls(self, mock_client_cls):
        _mock_client(mock_client_cls, _mock_response())
        probe = _mock_probe()
        stages = []
        executor = TimedRequestExecutor(probe=probe, on_stage=stages.append)

        record = executor.execute(RequestConfig(url="http://localhost:8080/health"))

        assert record.timing.phase("tls") == 0
        probe.measure_tls.assert_not_called()
        probe.measure_tcp.assert_called_once_with("localhost", 8080, 5.0)
        assert stages == [
            ExecutionStage.RESOLVING,
            ExecutionStage.CONNECTING,
            ExecutionStage.REQUESTING,
            ExecutionStage.DONE,
        ]

    @patch("reqlens.timing.executor.httpx.Client")
    def test_stage_order_https(self, mock_client_cls):
        _mock_client(mock_client_cls, _mock_response())
        stages = []
        TimedRequestExecutor(probe=_mock_probe(), on_stage=stages.append).execute(
            RequestConfig(url="https://example.com")
        )
        assert stages == [
            ExecutionStage.RESOLVING,
            ExecutionStage.CONNECTING,
            ExecutionStage.HANDSHAKING,
            ExecutionStage.REQUESTING,
            ExecutionStage.DONE,
        ]

    @patch("reqlens.timing.executor.httpx.Client")
    def test_error_status_is_a_response(self, mock_client_cls):
        response = _mock_response(
            status=404, reason="Not Found",
            headers={"content-type": "text/plain"}, content=b"missing",
        )
        _mock_client(mock_client_cls, response)

        record = TimedRequestExecutor(probe=_mock_probe()).execute(
            RequestConfig(url="https://api.example.com/nope")
        )

        assert record.status == 404
        assert record.status_text == "Not Found"
        assert record.data == "missing"

    @patch("reqlens.timing.executor.httpx.Client")
    def test_transport_error_carries_partial_timing(self, mock_client_cls):
        _mock_client(mock_client_cls, error=httpx.ConnectError("connection refused"))
        stages = []
        executor = TimedRequestExecutor(probe=_mock_probe(), on_stage=stages.append)

        with pytest.raises(TransportError) as exc_info:
            executor.execute(RequestConfig(url="https://api.example.com/"))

        error = exc_info.value
        assert "connection refused" in str(error)
        assert isinstance(error.cause, httpx.ConnectError)
        assert error.timing.phase("dns") == 10.0
        assert error.timing.phase("tcp") == 20.0
        assert error.timing.phase("tls") == 30.0
        assert error.timing.phase("download") is None
        assert error.timing.total == error.timing.end - error.timing.start
        assert error.timing.total >= 0
        assert executor.stage is ExecutionStage.FAILED
        assert stages[-1] is ExecutionStage.FAILED

    @patch("reqlens.timing.executor.httpx.Client")
    def test_timeout_is_transport_error(self, mock_client_cls):
        _mock_client(mock_client_cls, error=httpx.ReadTimeout("timed out"))
        with pytest.raises(TransportError):
            TimedRequestExecutor(probe=_mock_probe()).execute(
                RequestConfig(url="https://api.example.com/")
            )

    @patch("reqlens.timing.executor.httpx.Client")
    def test_invalid_url_before_network(self, mock_client_cls):
        probe = _mock_probe()
        executor = TimedRequestExecutor(probe=probe)

        with pytest.raises(InvalidUrlError):
            executor.execute(RequestConfig(url="ftp://example.com/file"))

        probe.measure_dns.assert_not_called()
        mock_client_cls.assert_not_called()
        assert executor.stage is ExecutionStage.IDLE

    @patch("reqlens.timing.executor.httpx.Client")
    def test_client_options(self, mock_client_cls):
        _mock_client(mock_client_cls, _mock_response())
        executor = TimedRequestExecutor(
            timeout=12.0, verify_ssl=False, proxy="http://127.0.0.1:8080",
            follow_redirects=True, probe=_mock_probe(),
        )
        executor.execute(RequestConfig(url="https://example.com"))

        mock_client_cls.assert_called_once_with(
            timeout=12.0,
            verify=False,
            proxy="http://127.0.0.1:8080",
            follow_redirects=True,
        )

    @patch("reqlens.timing.executor.httpx.Client")
    def test_params_headers_and_json_body(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls, _mock_response())
        config = RequestConfig(
            url="https://api.example.com/users",
            method="POST",
            headers={"Content-Type": "application/json"},
            params={"dry_run": "1"},
            data={"name": "test"},
        )

        TimedRequestExecutor(probe=_mock_probe()).execute(config)

        kwargs = mock_client.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["url"] == "https://api.example.com/users?dry_run=1"
        assert kwargs["headers"] == {"Content-Type": "application/json"}
        assert kwargs["json"] == {"name": "test"}
        assert "content" not in kwargs

    @patch("reqlens.timing.executor.httpx.Client")
    def test_text_body(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls, _mock_response())
        config = RequestConfig(url="https://example.com", method="PUT", data="raw text")

        TimedRequestExecutor(probe=_mock_probe()).execute(config)

        kwargs = mock_client.request.call_args.kwargs
        assert kwargs["content"] == "raw text"
        assert "json" not in kwargs

    @patch("reqlens.timing.executor.httpx.Client")
    def test_no_body(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls, _mock_response())
        TimedRequestExecutor(probe=_mock_probe()).execute(RequestConfig(url="https://example.com"))

        kwargs = mock_client.request.call_args.kwargs
        assert "json" not in kwargs
        assert "content" not in kwargs

    @patch("reqlens.timing.executor.httpx.Client")
    def test_scalar_text_body_sent_as_typed(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls, _mock_response())
        config = RequestConfig(url="https://example.com", method="POST", data=parse_body("false"))

        TimedRequestExecutor(probe=_mock_probe()).execute(config)

        kwargs = mock_client.request.call_args.kwargs
        assert kwargs["content"] == "false"
        assert "json" not in kwargs

    @patch("reqlens.timing.executor.httpx.Client")
    def test_non_string_scalar_body_serialized_as_json(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls, _mock_response())
        config = RequestConfig(url="https://example.com", method="POST", data=False)

        TimedRequestExecutor(probe=_mock_probe()).execute(config)

        assert mock_client.request.call_args.kwargs["content"] == "false"

    @pytest.mark.parametrize("typed", ["false", "1e3", "123", '"quoted"'])
    def test_body_bytes_on_the_wire(self, typed):
        sent = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request.content)
            return httpx.Response(200, json={"ok": True})

        def client_factory(**kwargs):
            return _REAL_CLIENT(transport=httpx.MockTransport(handler), **kwargs)

        config = build_request_config("http://example.com/", method="POST", data=parse_body(typed))
        with patch("reqlens.timing.executor.httpx.Client", side_effect=client_factory):
            record = TimedRequestExecutor(probe=_mock_probe()).execute(config)

        assert sent == [typed.encode("ascii")]
        assert record.status == 200

    @patch("reqlens.timing.executor.httpx.Client")
    def test_non_ascii_header_before_network(self, mock_client_cls):
        probe = _mock_probe()
        executor = TimedRequestExecutor(probe=probe)

        with pytest.raises(InvalidRequestError, match="X-Name"):
            executor.execute(RequestConfig(url="http://example.com/", headers={"X-Name": "café"}))

        probe.measure_dns.assert_not_called()
        mock_client_cls.assert_not_called()
        assert executor.stage is ExecutionStage.IDLE

    @patch("reqlens.timing.executor.httpx.Client")
    def test_control_character_url_before_network(self, mock_client_cls):
        probe = _mock_probe()

        with pytest.raises(InvalidUrlError):
            TimedRequestExecutor(probe=probe).execute(RequestConfig(url="http://example.com/a\x00b"))

        probe.measure_dns.assert_not_called()
        mock_client_cls.assert_not_called()
