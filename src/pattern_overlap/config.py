"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pattern_overlap.conflicts import CheckLimits
from pattern_overlap.overlap import ALGORITHM_NAMES, DEFAULT_ALGORITHM

CONFIG_FILE_NAME = "pattern_overlap.toml"
DATA_DIR_NAME = ".pattern_overlap"

MAX_PATTERNS_CAP = 100_000
MAX_FRAGMENTS_CAP = 4_096

OUTPUT_FORMATS = ("text", "json")


@dataclass(slots=True, frozen=True)
class InputConfig:
    """Line filtering applied before parsing."""

    comment_prefix: str | None
    skip_blank_lines: bool


@dataclass(slots=True, frozen=True)
class CheckerConfig:
    """Fully merged checker configuration."""

    root: Path
    data_dir: Path
    algorithm: str
    input: InputConfig
    limits: CheckLimits
    output_format: str
    audit_enabled: bool

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for reports."""
        return {
            "root": str(self.root),
            "data_dir": str(self.data_dir),
            "engine": {"algorithm": self.algorithm},
            "input": {
                "comment_prefix": self.input.comment_prefix,
                "skip_blank_lines": self.input.skip_blank_lines,
            },
            "limits": {
                "max_patterns": self.limits.max_patterns,
                "max_fragments": self.limits.max_fragments,
            },
            "output": {"format": self.output_format},
            "audit": {"enabled": self.audit_enabled},
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    data_dir: Path | None = None
    algorithm: str | None = None
    comment_prefix: str | None = None
    skip_blank_lines: bool | None = None
    max_patterns: int | None = None
    max_fragments: int | None = None
    output_format: str | None = None
    audit_enabled: bool | None = None


def default_config(root: Path) -> CheckerConfig:
    """Build default config for a given project root."""
    resolved_root = root.resolve()
    return CheckerConfig(
        root=resolved_root,
        data_dir=resolved_root / DATA_DIR_NAME,
        algorithm=DEFAULT_ALGORITHM,
        input=InputConfig(comment_prefix=None, skip_blank_lines=False),
        limits=CheckLimits(),
        output_format="text",
        audit_enabled=False,
    )


def load_config_file(root: Path, config_path: Path | None = None) -> dict[str, object]:
    """Load an explicit config file, or the optional pattern_overlap.toml under root."""
    if config_path is None:
        config_path = root / CONFIG_FILE_NAME
        if not config_path.exists():
            return {}
    elif not config_path.exists():
        raise ValueError(f"Config file not found: {config_path}")
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def merge_config(
    base: CheckerConfig, payload: dict[str, object], overrides: CliOverrides
) -> CheckerConfig:
    """Merge defaults, config file, then CLI overrides."""
    engine_payload = _get_table(payload, "engine")
    input_payload = _get_table(payload, "input")
    limits_payload = _get_table(payload, "limits")
    output_payload = _get_table(payload, "output")
    audit_payload = _get_table(payload, "audit")

    algorithm = _optional_choice(
        engine_payload.get("algorithm"), "engine.algorithm", base.algorithm, ALGORITHM_NAMES
    )

    comment_prefix = base.input.comment_prefix
    if "comment_prefix" in input_payload:
        raw_prefix = input_payload["comment_prefix"]
        if not isinstance(raw_prefix, str) or not raw_prefix:
            raise ValueError("Config field 'input.comment_prefix' must be a non-empty string.")
        comment_prefix = raw_prefix
    skip_blank_lines = _optional_bool(
        input_payload.get("skip_blank_lines"),
        "input.skip_blank_lines",
        base.input.skip_blank_lines,
    )

    max_patterns = _optional_positive_int_with_cap(
        limits_payload.get("max_patterns"),
        "limits.max_patterns",
        base.limits.max_patterns,
        MAX_PATTERNS_CAP,
    )
    max_fragments = _optional_positive_int_with_cap(
        limits_payload.get("max_fragments"),
        "limits.max_fragments",
        base.limits.max_fragments,
        MAX_FRAGMENTS_CAP,
    )

    output_format = _optional_choice(
        output_payload.get("format"), "output.format", base.output_format, OUTPUT_FORMATS
    )
    audit_enabled = _optional_bool(
        audit_payload.get("enabled"), "audit.enabled", base.audit_enabled
    )

    merged = CheckerConfig(
        root=base.root,
        data_dir=base.data_dir,
        algorithm=algorithm,
        input=InputConfig(comment_prefix=comment_prefix, skip_blank_lines=skip_blank_lines),
        limits=CheckLimits(max_patterns=max_patterns, max_fragments=max_fragments),
        output_format=output_format,
        audit_enabled=audit_enabled,
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: CheckerConfig, overrides: CliOverrides) -> CheckerConfig:
    """Apply startup overrides at highest precedence."""
    algorithm = _optional_choice(
        overrides.algorithm, "overrides.algorithm", config.algorithm, ALGORITHM_NAMES
    )
    output_format = _optional_choice(
        overrides.output_format, "overrides.output_format", config.output_format, OUTPUT_FORMATS
    )
    limits = CheckLimits(
        max_patterns=_optional_positive_int_with_cap(
            overrides.max_patterns,
            "overrides.max_patterns",
            config.limits.max_patterns,
            MAX_PATTERNS_CAP,
        ),
        max_fragments=_optional_positive_int_with_cap(
            overrides.max_fragments,
            "overrides.max_fragments",
            config.limits.max_fragments,
            MAX_FRAGMENTS_CAP,
        ),
    )
    comment_prefix = config.input.comment_prefix
    if overrides.comment_prefix is not None:
        if not overrides.comment_prefix:
            raise ValueError(
                "Config field 'overrides.comment_prefix' must be a non-empty string."
            )
        comment_prefix = overrides.comment_prefix
    input_config = InputConfig(
        comment_prefix=comment_prefix,
        skip_blank_lines=(
            overrides.skip_blank_lines
            if overrides.skip_blank_lines is not None
            else config.input.skip_blank_lines
        ),
    )
    data_dir = overrides.data_dir or config.data_dir
    return CheckerConfig(
        root=config.root,
        data_dir=data_dir.resolve(),
        algorithm=algorithm,
        input=input_config,
        limits=limits,
        output_format=output_format,
        audit_enabled=(
            overrides.audit_enabled
            if overrides.audit_enabled is not None
            else config.audit_enabled
        ),
    )


def load_effective_config(
    root: Path,
    overrides: CliOverrides | None = None,
    config_path: Path | None = None,
) -> CheckerConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    resolved_root = root.resolve()
    base = default_config(resolved_root)
    payload = load_config_file(resolved_root, config_path)
    return merge_config(base, payload, overrides or CliOverrides())


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_choice(value: object, name: str, default: str, choices: tuple[str, ...]) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or value not in choices:
        raise ValueError(f"Config field '{name}' must be one of: {', '.join(choices)}.")
    return value


def _optional_positive_int_with_cap(
    value: object,
    name: str,
    default: int,
    cap: int | None,
) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if cap is not None and value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value
