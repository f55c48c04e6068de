"""Configuration loading utilities for the transaction scanning suite."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from . import paths
from .exceptions import ConfigurationError

EXPORT_FORMATS = ("csv", "json", "table")


@dataclass(frozen=True, slots=True)
class ScanSettings:
    """Page scanning configuration."""

    default_source: str
    use_fallback: bool
    timeout_seconds: float


@dataclass(frozen=True, slots=True)
class SiteSetting:
    """A user-supplied ``pattern -> label`` site rule."""

    pattern: str
    label: str


@dataclass(frozen=True, slots=True)
class ExportSettings:
    """Output configuration."""

    output_dir: Path
    format: str


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Top-level application configuration."""

    source_path: Path
    scan: ScanSettings
    sites: tuple[SiteSetting, ...]
    export: ExportSettings

    def with_output_dir(self, new_path: str | Path) -> AppConfig:
        """Return a copy with an updated export directory."""
        resolved = paths.resolve_path(new_path)
        return replace(self, export=replace(self.export, output_dir=resolved))


def _default_config(env: Mapping[str, str]) -> dict[str, Any]:
    return {
        "scan": {
            "default_source": "Generic",
            "use_fallback": True,
            "timeout_seconds": 5.0,
        },
        "sites": [],
        "export": {
            "output_dir": str(paths.default_output_dir(env=env)),
            "format": "csv",
        },
    }


ENV_OVERRIDE_SPEC: dict[str, tuple[str, type]] = {
    "scan.default_source": ("TXNSCAN_DEFAULT_SOURCE", str),
    "scan.use_fallback": ("TXNSCAN_USE_FALLBACK", bool),
    "scan.timeout_seconds": ("TXNSCAN_TIMEOUT_SECONDS", float),
    "export.output_dir": (paths.OUTPUT_DIR_ENV, str),
    "export.format": ("TXNSCAN_EXPORT_FORMAT", str),
}


def load_config(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from defaults, YAML file, and env overrides."""
    env = dict(env or os.environ)
    resolved_config_path = _resolve_config_path(config_path, env)
    file_data = _load_yaml(resolved_config_path)
    defaults = _default_config(env)
    merged: dict[str, Any] = _deep_merge(defaults, file_data)
    merged = _apply_env_overrides(merged, env)
    return _build_config(merged, resolved_config_path)


def _resolve_config_path(
    config_path: str | Path | None, env: Mapping[str, str]
) -> Path:
    if config_path:
        return paths.resolve_path(config_path)
    return paths.default_config_path(env=env)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file at {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigurationError(f"Config file at {path} must define a mapping root object.")
        return dict(data)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    config_copy = _deep_merge(config, {})  # shallow copy via merge
    for dotted_key, (env_key, expected_type) in ENV_OVERRIDE_SPEC.items():
        if env_key not in env:
            continue
        raw_value = env[env_key]
        try:
            value = _coerce_env_value(raw_value, expected_type)
        except ValueError as exc:
            raise ConfigurationError(
                f"Environment override {env_key} has invalid value '{raw_value}': {exc}"
            ) from exc
        _assign_nested(config_copy, dotted_key.split("."), value)
    return config_copy


def _coerce_env_value(raw: str, expected_type: type) -> Any:
    cleaned = raw.strip()
    if expected_type is bool:
        lowered = cleaned.lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
        raise ValueError("expected boolean (true/false)")
    if expected_type is float:
        return float(cleaned)
    return cleaned


def _assign_nested(target: MutableMapping[str, Any], keys: list[str], value: Any) -> None:
    current = target
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def _build_sites(raw_sites: Any) -> tuple[SiteSetting, ...]:
    if raw_sites is None:
        return ()
    if not isinstance(raw_sites, list):
        raise ConfigurationError("'sites' must be a list of {pattern, label} mappings.")
    sites: list[SiteSetting] = []
    for entry in raw_sites:
        if not isinstance(entry, Mapping) or not entry.get("pattern") or not entry.get("label"):
            raise ConfigurationError(f"Invalid site rule {entry!r}; expected pattern and label.")
        sites.append(SiteSetting(pattern=str(entry["pattern"]), label=str(entry["label"])))
    return tuple(sites)


def _build_config(data: Mapping[str, Any], source_path: Path) -> AppConfig:
    try:
        scan_cfg = data["scan"]
        scan = ScanSettings(
            default_source=str(scan_cfg["default_source"]),
            use_fallback=bool(scan_cfg["use_fallback"]),
            timeout_seconds=float(scan_cfg["timeout_seconds"]),
        )
        export_cfg = data["export"]
        export = ExportSettings(
            output_dir=paths.resolve_path(str(export_cfg["output_dir"])),
            format=str(export_cfg["format"]).lower(),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid configuration structure: {exc}") from exc

    if scan.timeout_seconds <= 0:
        raise ConfigurationError("scan.timeout_seconds must be positive.")
    if export.format not in EXPORT_FORMATS:
        raise ConfigurationError(
            f"export.format must be one of {', '.join(EXPORT_FORMATS)} (got '{export.format}')."
        )

    return AppConfig(
        source_path=source_path,
        scan=scan,
        sites=_build_sites(data.get("sites")),
        export=export,
    )
