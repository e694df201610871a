"""Standalone connection-setup probes.

Each probe opens its own disposable connection, separate from the one
httpx uses for the real request, so the numbers estimate setup cost
rather than time the request itself. Probes never raise: a failure or
timeout reports the time elapsed until it happened.
"""

from __future__ import annotations

import logging
import socket
import ssl

from .timer import now_ms

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 5.0  # seconds


def _insecure_context() -> ssl.SSLContext:
    """TLS context that skips certificate checks (handshake cost only)."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class PhaseProbe:
    """DNS, TCP and TLS timing probes."""

    @staticmethod
    def measure_dns(hostname: str) -> float:
        """Resolve hostname with the system resolver."""
        start = now_ms()
        try:
            socket.getaddrinfo(hostname, None)
        except (OSError, ValueError) as e:
            logger.debug("DNS probe for %s failed: %s", hostname, e)
        elapsed = now_ms() - start
        logger.debug("DNS probe %s: %.2fms", hostname, elapsed)
        return elapsed

    @staticmethod
    def measure_tcp(hostname: str, port: int, timeout: float = PROBE_TIMEOUT) -> float:
        """Open and close a raw TCP connection."""
        start = now_ms()
        try:
            with socket.create_connection((hostname, port), timeout=timeout):
                pass
        except (OSError, ValueError) as e:
            logger.debug("TCP probe for %s:%s failed: %s", hostname, port, e)
        elapsed = now_ms() - start
        logger.debug("TCP probe %s:%s: %.2fms", hostname, port, elapsed)
        return elapsed

    @staticmethod
    def measure_tls(hostname: str, port: int, timeout: float = PROBE_TIMEOUT) -> float:
        """Open and close a TLS session, including its TCP connect."""
        start = now_ms()
        try:
            with socket.create_connection((hostname, port), timeout=timeout) as sock:
                with _insecure_context().wrap_socket(sock, server_hostname=hostname):
                    pass
        except (OSError, ValueError) as e:
            logger.debug("TLS probe for %s:%s failed: %s", hostname, port, e)
        elapsed = now_ms() - start
        logger.debug("TLS probe %s:%s: %.2fms", hostname, port, elapsed)
        return elapsed
