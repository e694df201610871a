"""Configuration loader for reqlens."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NoReturn, Optional

from ruamel.yaml import YAML, YAMLError

from .thresholds import ANALYSIS_PREVIEW_LENGTH, BODY_PREVIEW_LENGTH, WATERFALL_WIDTH
from .timing.executor import DEFAULT_TIMEOUT
from .timing.probe import PROBE_TIMEOUT


@dataclass
class ReqlensConfig:
    """reqlens configuration."""

    # Request settings
    request_timeout: float = DEFAULT_TIMEOUT  # seconds, bounds the real request
    probe_timeout: float = PROBE_TIMEOUT      # seconds, per DNS/TCP/TLS probe
    verify_ssl: bool = True
    follow_redirects: bool = False
    proxy: Optional[str] = None

    # Headers sent with every request (user headers win)
    default_headers: dict[str, str] = field(default_factory=dict)

    # Display settings
    body_preview_length: int = BODY_PREVIEW_LENGTH
    analysis_preview_length: int = ANALYSIS_PREVIEW_LENGTH
    waterfall_width: int = WATERFALL_WIDTH
    show_analysis: bool = True


CONFIG_SEARCH_PATHS = [
    "reqlens.yaml",
    "reqlens.yml",
    ".reqlens.yaml",
    ".reqlens.yml",
]

FLOAT_FIELDS = {"request_timeout", "probe_timeout"}
INT_FIELDS = {"body_preview_length", "analysis_preview_length", "waterfall_width"}
BOOL_FIELDS = {"verify_ssl", "follow_redirects", "show_analysis"}

KNOWN_KEYS = FLOAT_FIELDS | INT_FIELDS | BOOL_FIELDS | {"proxy", "default_headers"}


class ConfigError(ValueError):
    """Invalid value in a config file."""


def find_config_path() -> Path | None:
    """First of CONFIG_SEARCH_PATHS present in the working directory."""
    cwd = Path.cwd()
    return next((cwd / name for name in CONFIG_SEARCH_PATHS if (cwd / name).exists()), None)


def _read_yaml(config_path: Path) -> Any:
    """Load a config file, unwrapping an optional top-level `reqlens:` key."""
    with open(config_path, "r", encoding="utf-8") as f:
        data = YAML().load(f)
    if isinstance(data, dict) and "reqlens" in data:
        return data["reqlens"]
    return data


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ConfigError(f"expected true/false, got: {value}")


def _coerce(key: str, value: Any) -> Any:
    """Convert a raw YAML value to the type of a config field."""
    if key in FLOAT_FIELDS or key in INT_FIELDS:
        cast, kind = (float, "a number") if key in FLOAT_FIELDS else (int, "an integer")
        try:
            number = cast(value)
        except (ValueError, TypeError) as e:
            raise ConfigError(f"'{key}' must be {kind}, got: {value}") from e
        if number <= 0:
            raise ConfigError(f"'{key}' must be positive, got: {value}")
        return number

    if key in BOOL_FIELDS:
        try:
            return _coerce_bool(value)
        except ConfigError as e:
            raise ConfigError(f"'{key}' {e}") from e
    if key == "proxy":
        return None if value in (None, "") else str(value)
    if key == "default_headers":
        if not isinstance(value, dict):
            raise ConfigError("'default_headers' must be a mapping (name: value)")
        return {str(k): str(v) for k, v in value.items()}
    return value


def save_config_value(config_path: Path, key: str, value: str) -> None:
    """Write one setting back to the file, keeping comments and layout.

    `default_headers.<Name>` sets a single header.

    Raises:
        ConfigError: Unknown key or a value of the wrong type
    """
    yaml = YAML()
    yaml.preserve_quotes = True
    with open(config_path, "r", encoding="utf-8") as f:
        document = yaml.load(f) or {}

    section = document["reqlens"] if "reqlens" in document else document

    field_name, _, header = key.partition(".")
    if field_name == "default_headers" and header:
        if not isinstance(section.get("default_headers"), dict):
            section["default_headers"] = {}
        section["default_headers"][header] = value
    elif header or field_name not in KNOWN_KEYS:
        raise ConfigError(f"Unknown key: '{key}'")
    else:
        section[field_name] = _coerce(field_name, value)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(document, f)


def _check_file(config_path: Path) -> tuple[Any, list[str]]:
    """Read a config file and collect problems instead of raising."""
    try:
        data = _read_yaml(config_path)
    except YAMLError as e:
        return None, [f"Invalid YAML in {config_path}: {e}"]
    except OSError as e:
        return None, [f"Cannot read {config_path}: {e}"]

    if data is not None and not isinstance(data, dict):
        return None, [f"Config must be a YAML mapping, got {type(data).__name__}"]
    return data or {}, []


def validate_config(config_path: Path) -> list[str]:
    """All problems in a config file; an empty list means it is valid."""
    data, problems = _check_file(config_path)
    for key, value in (data or {}).items():
        if key not in KNOWN_KEYS:
            problems.append(f"Unknown key: '{key}'")
            continue
        try:
            _coerce(key, value)
        except ConfigError as e:
            problems.append(str(e))
    return problems


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def load_config(config_path: str | Path | None = None) -> ReqlensConfig:
    """Build the effective settings from defaults and the config file.

    An explicit path must exist; a discovered file is optional. Any
    read, syntax or type error is fatal and exits with status 1.
    Unknown keys are ignored here (`reqlens config validate` reports them).
    """
    settings = ReqlensConfig()

    path = Path(config_path) if config_path is not None else find_config_path()
    if path is None:
        return settings
    if not path.exists():
        if config_path is not None:
            _fail(f"Config file not found: {path}")
        return settings

    data, problems = _check_file(path)
    if problems:
        _fail(problems[0])

    for key, value in data.items():
        if key in KNOWN_KEYS:
            try:
                setattr(settings, key, _coerce(key, value))
            except ConfigError as e:
                _fail(f"{e} ({path})")
    return settings


def get_default_config_yaml() -> str:
    """Return default YAML config template."""
    return r'''# reqlens configuration
# Place this file as reqlens.yaml in your working directory

reqlens:
  # Timeout for the real HTTP request (seconds)
  request_timeout: 30.0

  # Timeout for each DNS/TCP/TLS probe connection (seconds)
  probe_timeout: 5.0

  # Verify TLS certificates on the real request (probes never verify)
  verify_ssl: true

  # Follow 3xx redirects instead of reporting them
  follow_redirects: false

  # HTTP proxy for the real request, e.g. http://127.0.0.1:8080
  proxy: null

  # Headers sent with every request (headers you enter take priority)
  default_headers: {}
    # User-Agent: reqlens/0.3

  # Characters of body shown in the breakdown preview
  body_preview_length: 500

  # Characters of body shown in the analysis preview
  analysis_preview_length: 1000

  # Width of the timing waterfall in characters
  waterfall_width: 60

  # Show the response analysis section
  show_analysis: true
'''
