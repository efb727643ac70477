"""Config manager — load JSON → apply env overrides → validate → BullhornConfig."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from bullhorn.core.models.config import BullhornConfig

_log = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "bullhorn"
_CONFIG_FILE_NAME = "config.json"

# Environment variable → (config field, type) mapping.
_ENV_OVERRIDES: dict[str, tuple[str, type]] = {
    "BULLHORN_NPUB": ("npub", str),
    "BULLHORN_EVENT_NPUBS": ("event_npubs", list),
    "BULLHORN_NTFY_SERVER": ("ntfy_server", str),
    "BULLHORN_LOG_LEVEL": ("log_level", str),
    "BULLHORN_ZAP_DEBOUNCE_SECONDS": ("zap_debounce_seconds", float),
}


def _coerce(value: str, target_type: type) -> object:
    """Coerce a string env-var value to the expected Python type."""
    if target_type is list:
        return [item.strip() for item in value.split(",") if item.strip()]
    return target_type(value)


def config_dir() -> Path:
    """Directory holding ``config.json`` and the topic file."""
    env = os.environ.get("BULLHORN_CONFIG_DIR")
    return Path(env) if env else DEFAULT_CONFIG_DIR


def load_config(config_path: Path | str | None = None) -> BullhornConfig:
    """Load, override, and validate the Bullhorn configuration.

    Args:
        config_path: Path to ``config.json``.  When *None*, falls back to the
            ``BULLHORN_CONFIG_FILE`` env-var and then ``config.json`` inside
            :func:`config_dir`.  The file is optional; when it is missing the
            settings come from the ``BULLHORN_*`` environment variables alone.

    Returns:
        A fully-validated :class:`BullhornConfig` instance.

    Raises:
        pydantic.ValidationError: If the merged settings are invalid.
    """
    path = _resolve_config_path(config_path)
    if path.is_file():
        _log.info("Loading config from %s", path)
        raw = json.loads(path.read_text(encoding="utf-8"))
    else:
        _log.info("No config file at %s; using environment only", path)
        raw = {}

    # Apply env overrides ------------------------------------------------
    for env_key, (field, typ) in _ENV_OVERRIDES.items():
        env_val = os.environ.get(env_key)
        if env_val is not None:
            raw[field] = _coerce(env_val, typ)
            _log.debug("Env override: %s → %s = %r", env_key, field, env_val)

    return BullhornConfig(**raw)


def _resolve_config_path(config_path: Path | str | None) -> Path:
    if config_path is not None:
        p = Path(config_path)
    else:
        env = os.environ.get("BULLHORN_CONFIG_FILE")
        p = Path(env) if env else config_dir() / _CONFIG_FILE_NAME
    return p
