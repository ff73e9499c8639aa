"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILE_NAME = "fortune_index.toml"

DEFAULT_INDEX_EXTENSION = ".dat"
DEFAULT_DELIMITER_WIDTH = 1
DEFAULT_FALLBACK_DELIMITER = "%"
DEFAULT_RECORD_TERMINATOR = "%"

DELIMITER_WIDTHS = (1, 4)
LISTING_ORDERS = ("name", "filesystem")


@dataclass(slots=True, frozen=True)
class IndexSettings:
    """How index files are recognized and decoded."""

    extension: str = DEFAULT_INDEX_EXTENSION
    delimiter_width: int = DEFAULT_DELIMITER_WIDTH
    listing_order: str = "name"


@dataclass(slots=True, frozen=True)
class OutputSettings:
    """Characters used when reading and printing adages."""

    fallback_delimiter: str = DEFAULT_FALLBACK_DELIMITER
    record_terminator: str = DEFAULT_RECORD_TERMINATOR


@dataclass(slots=True, frozen=True)
class FortuneConfig:
    """Fully merged configuration."""

    index: IndexSettings
    output: OutputSettings
    audit_log: Path | None = None


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    extension: str | None = None
    delimiter_width: int | None = None
    audit_log: Path | None = None


def default_config() -> FortuneConfig:
    """Build the default configuration."""
    return FortuneConfig(index=IndexSettings(), output=OutputSettings())


def load_config_file(path: Path) -> dict[str, object]:
    """Load an optional TOML config file; a missing file yields an empty payload."""
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{path.name} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _extension(value: object, name: str) -> str:
    if not isinstance(value, str) or not value.startswith(".") or len(value) < 2:
        raise ValueError(f"Config field '{name}' must be a string such as '.dat'.")
    return value


def _delimiter_width(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value not in DELIMITER_WIDTHS:
        raise ValueError(f"Config field '{name}' must be one of {list(DELIMITER_WIDTHS)}.")
    return value


def _single_char(value: object, name: str) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"Config field '{name}' must be a single character.")
    return value


def merge_config(
    base: FortuneConfig, payload: dict[str, object], overrides: CliOverrides
) -> FortuneConfig:
    """Merge defaults, config file, then CLI overrides."""
    index_payload = _get_table(payload, "index")
    output_payload = _get_table(payload, "output")
    logging_payload = _get_table(payload, "logging")

    extension = base.index.extension
    if "extension" in index_payload:
        extension = _extension(index_payload["extension"], "index.extension")
    delimiter_width = base.index.delimiter_width
    if "delimiter_width" in index_payload:
        delimiter_width = _delimiter_width(
            index_payload["delimiter_width"], "index.delimiter_width"
        )
    listing_order = base.index.listing_order
    if "listing_order" in index_payload:
        raw_order = index_payload["listing_order"]
        if not isinstance(raw_order, str) or raw_order not in LISTING_ORDERS:
            raise ValueError(
                f"Config field 'index.listing_order' must be one of {list(LISTING_ORDERS)}."
            )
        listing_order = raw_order

    fallback_delimiter = base.output.fallback_delimiter
    if "fallback_delimiter" in output_payload:
        fallback_delimiter = _single_char(
            output_payload["fallback_delimiter"], "output.fallback_delimiter"
        )
    record_terminator = base.output.record_terminator
    if "record_terminator" in output_payload:
        record_terminator = _single_char(
            output_payload["record_terminator"], "output.record_terminator"
        )

    audit_log = base.audit_log
    if "audit_log" in logging_payload:
        raw_audit_log = logging_payload["audit_log"]
        if not isinstance(raw_audit_log, str) or not raw_audit_log:
            raise ValueError("Config field 'logging.audit_log' must be a non-empty string.")
        audit_log = Path(raw_audit_log)

    merged = FortuneConfig(
        index=IndexSettings(
            extension=extension,
            delimiter_width=delimiter_width,
            listing_order=listing_order,
        ),
        output=OutputSettings(
            fallback_delimiter=fallback_delimiter,
            record_terminator=record_terminator,
        ),
        audit_log=audit_log,
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: FortuneConfig, overrides: CliOverrides) -> FortuneConfig:
    """Apply startup overrides at highest precedence."""
    extension = config.index.extension
    if overrides.extension is not None:
        extension = _extension(overrides.extension, "overrides.extension")
    delimiter_width = config.index.delimiter_width
    if overrides.delimiter_width is not None:
        delimiter_width = _delimiter_width(overrides.delimiter_width, "overrides.delimiter_width")
    audit_log = overrides.audit_log or config.audit_log
    return FortuneConfig(
        index=IndexSettings(
            extension=extension,
            delimiter_width=delimiter_width,
            listing_order=config.index.listing_order,
        ),
        output=config.output,
        audit_log=audit_log.resolve() if audit_log is not None else None,
    )


def load_effective_config(
    config_path: Path | None = None, overrides: CliOverrides | None = None
) -> FortuneConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    if config_path is not None and not config_path.exists():
        raise ValueError(f"Config file not found: {config_path}")
    path = config_path if config_path is not None else Path.cwd() / CONFIG_FILE_NAME
    payload = load_config_file(path)
    return merge_config(default_config(), payload, overrides or CliOverrides())
