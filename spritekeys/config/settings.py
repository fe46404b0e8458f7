"""Configuration dataclass and loading utilities.

Values are resolved in three layers: built-in defaults, then the JSON config
file, then ``SPRITEKEYS_<KEY>`` environment variables.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict, fields
from typing import Any, Dict, Mapping, Optional
import json, os, logging

from ..core.exceptions import ConfigError
from ..utils.image_utils import SUPPORTED_BACKENDS
from .defaults import DEFAULT_CONFIG, ENV_PREFIX

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

@dataclass(slots=True)
class Config:
    # Discovery settings
    min_key_pixels: int = DEFAULT_CONFIG["min_key_pixels"]
    max_key_pixels: int = DEFAULT_CONFIG["max_key_pixels"]
    max_workers: int = DEFAULT_CONFIG["max_workers"]
    batch_size: int = DEFAULT_CONFIG["batch_size"]

    # Image loading
    image_backend: str = DEFAULT_CONFIG["image_backend"]

    # Logging
    log_level: str = DEFAULT_CONFIG["log_level"]
    log_dir: str = DEFAULT_CONFIG["log_dir"]
    enable_file_logging: bool = DEFAULT_CONFIG["enable_file_logging"]
    structured_logging: bool = DEFAULT_CONFIG["structured_logging"]

    # Arbitrary extra values retained for forward compatibility
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        # merge extra keys at top-level for saving
        extra = d.pop("extra", {})
        d.update(extra)
        return d

    def get(self, key: str, default: Any = None) -> Any:
        if key in _FIELD_NAMES:
            return getattr(self, key)
        return self.extra.get(key, default)


_FIELD_NAMES = tuple(f.name for f in fields(Config) if f.name != "extra")


def _coerce(raw: str, default: Any, key: str) -> Any:
    """Coerce an environment variable string to the type of its default."""
    if isinstance(default, bool):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{key} must be a boolean, got {raw!r}")
    if isinstance(default, int):
        return int(raw.strip())
    return raw.strip()


def _environment_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for key in _FIELD_NAMES:
        env_key = ENV_PREFIX + key.upper()
        if env_key not in environ:
            continue
        try:
            overrides[key] = _coerce(environ[env_key], DEFAULT_CONFIG[key], env_key)
        except ValueError as e:
            logger.warning(f"Ignoring environment variable {env_key}: {e}")
    if overrides:
        logger.debug(f"Environment overrides: {sorted(overrides)}")
    return overrides


def validate_config(cfg: Config) -> Config:
    """Reject settings the discovery driver or logging would fail on."""
    for key in ("min_key_pixels", "max_key_pixels", "max_workers", "batch_size"):
        value = getattr(cfg, key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{key} must be an integer, got {value!r}")
    if cfg.min_key_pixels < 0 or cfg.max_key_pixels < 0:
        raise ConfigError("min_key_pixels and max_key_pixels must not be negative")
    if cfg.min_key_pixels > cfg.max_key_pixels:
        raise ConfigError(
            f"min_key_pixels ({cfg.min_key_pixels}) exceeds max_key_pixels ({cfg.max_key_pixels})")
    if cfg.max_workers < 0:
        raise ConfigError("max_workers must not be negative")
    if cfg.batch_size < 1:
        raise ConfigError("batch_size must be at least 1")
    if cfg.image_backend not in SUPPORTED_BACKENDS:
        raise ConfigError(
            f"image_backend must be one of {', '.join(SUPPORTED_BACKENDS)}, got {cfg.image_backend!r}")
    if str(cfg.log_level).upper() not in VALID_LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, got {cfg.log_level!r}")
    return cfg


def load_config(path: Optional[str] = "spritekeys.json",
                environ: Optional[Mapping[str, str]] = None) -> Config:
    """Load configuration from defaults, a JSON file and the environment.

    A missing, empty or unreadable file falls back to the defaults with a
    log message; the merged result is validated.

    Args:
        path: Path to the JSON config file, or None to skip it
        environ: Environment mapping, ``os.environ`` when omitted

    Raises:
        ConfigError: The merged settings are invalid.
    """
    data: Dict[str, Any] = {}

    if path and os.path.isfile(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded_data = json.load(f)
            if loaded_data is None:
                logger.warning(f"Configuration file '{path}' is empty, using defaults")
            elif not isinstance(loaded_data, dict):
                logger.error(f"Configuration file '{path}' does not contain a JSON object, using defaults")
            else:
                data = loaded_data
                logger.info(f"Loaded configuration from '{path}'")
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON configuration file '{path}': {e}. Using defaults.")
        except PermissionError:
            logger.error(f"Permission denied reading configuration file '{path}'. Using defaults.")
    elif path:
        logger.debug(f"Configuration file '{path}' does not exist. Using defaults.")

    merged = {**DEFAULT_CONFIG, **data}
    merged.update(_environment_overrides(os.environ if environ is None else environ))

    extra = {k: v for k, v in merged.items() if k not in _FIELD_NAMES}
    if extra:
        logger.info(f"Found extra configuration keys: {list(extra.keys())}")

    cfg = Config(**{k: merged[k] for k in _FIELD_NAMES}, extra=extra)
    return validate_config(cfg)


def save_config(cfg: Config, path: str = "spritekeys.json") -> None:
    """Save configuration to a JSON file."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(cfg.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Configuration saved to '{path}'")
    except OSError as e:
        raise ConfigError(f"Could not write configuration file '{path}': {e}") from e
