"""Default configuration values."""

from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    # Discovery settings
    "min_key_pixels": 1,
    "max_key_pixels": 4,
    "max_workers": 0,  # 0 runs trials inline
    "batch_size": 256,

    # Image loading
    "image_backend": "opencv",  # opencv (BGR order) or pillow (RGB order)

    # Debug and Logging Settings
    "log_level": "INFO",
    "log_dir": "logs",
    "enable_file_logging": False,
    "structured_logging": False,
}

ENV_PREFIX = "SPRITEKEYS_"
