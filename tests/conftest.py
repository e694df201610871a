"""Pytest fixtures for reqlens tests."""

from types import MappingProxyType

import pytest
from click.testing import CliRunner

from reqlens.request import RequestConfig
from reqlens.thresholds import PHASE_KEYS
from reqlens.timing.models import ResponseRecord, TimingSnapshot


def make_timing(total=100.0, **phases):
    """Build a TimingSnapshot with the given phases (others None)."""
    values = {key: None for key in PHASE_KEYS}
    values.update(phases)
    return TimingSnapshot(
        start=1000.0,
        end=1000.0 + total if total is not None else None,
        total=total,
        phases=MappingProxyType(values),
    )


@pytest.fixture
def sample_timing():
    """Timing of a fast HTTPS request."""
    return make_timing(
        total=100.0,
        dns=10.0,
        tcp=20.0,
        tls=0.0,
        request=60.0,
        waiting=50.0,
        first_byte=42.0,
        download=20.0,
    )


@pytest.fixture
def sample_request():
    """A GET request with one header and one query param."""
    return RequestConfig(
        url="https://api.example.com/users",
        method="GET",
        headers={"Accept": "application/json"},
        params={"page": "1"},
        original_url="https://api.example.com/users",
    )


@pytest.fixture
def sample_record(sample_timing):
    """A successful JSON response."""
    return ResponseRecord(
        status=200,
        status_text="OK",
        headers={
            "content-type": "application/json; charset=utf-8",
            "content-length": "27",
            "cache-control": "max-age=60",
            "strict-transport-security": "max-age=31536000",
        },
        data={"users": [{"id": 1}], "total": 1},
        timing=sample_timing,
        url="https://api.example.com/users?page=1",
        http_version="HTTP/1.1",
    )


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def timing_factory():
    """Factory for TimingSnapshot objects."""
    return make_timing
