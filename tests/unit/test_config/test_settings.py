"""Unit tests for configuration loading."""
import json

import pytest

from spritekeys.config.defaults import DEFAULT_CONFIG
from spritekeys.config.settings import Config, load_config, save_config, validate_config
from spritekeys.core.exceptions import ConfigError


def test_defaults_without_file(temp_dir):
    cfg = load_config(str(temp_dir / "missing.json"), environ={})
    assert cfg.min_key_pixels == DEFAULT_CONFIG["min_key_pixels"]
    assert cfg.max_key_pixels == DEFAULT_CONFIG["max_key_pixels"]
    assert cfg.image_backend == "opencv"
    assert cfg.extra == {}


def test_file_overrides_defaults(temp_dir):
    path = temp_dir / "spritekeys.json"
    path.write_text(json.dumps({"max_key_pixels": 8, "max_workers": 2, "notes": "kept"}))

    cfg = load_config(str(path), environ={})
    assert cfg.max_key_pixels == 8
    assert cfg.max_workers == 2
    assert cfg.extra == {"notes": "kept"}
    assert cfg.get("notes") == "kept"
    assert cfg.get("max_workers") == 2
    assert cfg.get("unknown", "fallback") == "fallback"


def test_environment_overrides_file(temp_dir):
    path = temp_dir / "spritekeys.json"
    path.write_text(json.dumps({"max_key_pixels": 8}))

    cfg = load_config(str(path), environ={
        "SPRITEKEYS_MAX_KEY_PIXELS": "3",
        "SPRITEKEYS_STRUCTURED_LOGGING": "yes",
        "SPRITEKEYS_IMAGE_BACKEND": "pillow",
    })
    assert cfg.max_key_pixels == 3
    assert cfg.structured_logging is True
    assert cfg.image_backend == "pillow"


def test_unparsable_environment_value_is_ignored(temp_dir):
    cfg = load_config(None, environ={"SPRITEKEYS_MAX_WORKERS": "many",
                                     "SPRITEKEYS_ENABLE_FILE_LOGGING": "perhaps"})
    assert cfg.max_workers == DEFAULT_CONFIG["max_workers"]
    assert cfg.enable_file_logging is False


@pytest.mark.parametrize("content", ["{not json", "null", "[1, 2]"])
def test_broken_file_falls_back_to_defaults(temp_dir, content):
    path = temp_dir / "spritekeys.json"
    path.write_text(content)
    cfg = load_config(str(path), environ={})
    assert cfg.to_dict() == Config().to_dict()


@pytest.mark.parametrize("overrides", [
    {"min_key_pixels": 5, "max_key_pixels": 2},
    {"min_key_pixels": -1},
    {"max_workers": -2},
    {"batch_size": 0},
    {"image_backend": "imageio"},
    {"log_level": "LOUD"},
    {"max_key_pixels": "4"},
])
def test_invalid_settings(temp_dir, overrides):
    path = temp_dir / "spritekeys.json"
    path.write_text(json.dumps(overrides))
    with pytest.raises(ConfigError):
        load_config(str(path), environ={})


def test_save_and_reload(temp_dir):
    path = temp_dir / "spritekeys.json"
    cfg = Config(max_key_pixels=6, extra={"notes": "x"})
    save_config(cfg, str(path))

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["max_key_pixels"] == 6
    assert saved["notes"] == "x"
    assert "extra" not in saved
    assert load_config(str(path), environ={}).max_key_pixels == 6


def test_validate_config_returns_config():
    cfg = Config()
    assert validate_config(cfg) is cfg
