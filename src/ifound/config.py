"""
Configuration management (SSOT).

This module defines ALL configuration for the iFound tracker.
All config keys are defined here; no other module should invent config keys.

Sources, lowest to highest precedence:
- Built-in defaults
- YAML config file
- Environment variables (IFOUND_*)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .state_store import DEFAULT_RECORD_KEY


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass
class PhotoConfig:
    """Photo downscaling settings."""

    # Longest allowed width in pixels; larger photos are downscaled
    max_width: int = 800
    # JPEG quality (1-95)
    quality: int = 80


@dataclass
class QrConfig:
    """QR code rendering settings."""

    box_size: int = 10
    border: int = 4
    output_dir: Path = field(default_factory=lambda: Path("data/qr"))


@dataclass
class Config:
    """Application configuration (SSOT)."""

    store_path: Path = field(default_factory=lambda: Path("data/ifound.db"))
    # Name of the single record holding the store blob
    record_key: str = DEFAULT_RECORD_KEY
    photos: PhotoConfig = field(default_factory=PhotoConfig)
    qr: QrConfig = field(default_factory=QrConfig)

    def validate(self) -> list[str]:
        """Validate configuration consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.record_key:
            errors.append("record_key is required")
        if self.photos.max_width <= 0:
            errors.append("photos.max_width must be positive")
        if not 1 <= self.photos.quality <= 95:
            errors.append("photos.quality must be between 1 and 95")
        if self.qr.box_size <= 0:
            errors.append("qr.box_size must be positive")
        if self.qr.border < 0:
            errors.append("qr.border must not be negative")

        return errors


def load_config(config_path: Path) -> Config:
    """
    Load configuration from YAML file.

    Environment variables can override config values:
    - IFOUND_STORE_PATH
    - IFOUND_RECORD_KEY
    - IFOUND_PHOTO_MAX_WIDTH
    """
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}

    photo_data = data.get("photos") or {}
    max_width = photo_data.get("max_width", 800)
    max_width_env = os.environ.get("IFOUND_PHOTO_MAX_WIDTH", "")
    if max_width_env:
        try:
            max_width = int(max_width_env)
        except ValueError:
            pass  # Keep file/default value

    photos = PhotoConfig(
        max_width=max_width,
        quality=photo_data.get("quality", 80),
    )

    qr_data = data.get("qr") or {}
    qr = QrConfig(
        box_size=qr_data.get("box_size", 10),
        border=qr_data.get("border", 4),
        output_dir=Path(qr_data.get("output_dir", "data/qr")),
    )

    store_path = os.environ.get("IFOUND_STORE_PATH", data.get("store_path", "data/ifound.db"))

    return Config(
        store_path=Path(store_path),
        record_key=os.environ.get("IFOUND_RECORD_KEY", data.get("record_key", DEFAULT_RECORD_KEY)),
        photos=photos,
        qr=qr,
    )


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = f"""# iFound lost-and-found tracker configuration

# SQLite file holding the store
store_path: "data/ifound.db"

# Name of the record inside the store file
record_key: "{DEFAULT_RECORD_KEY}"

# Photos are downscaled before they are stored
photos:
  max_width: 800      # pixels
  quality: 80         # JPEG quality, 1-95

# QR codes for registered items
qr:
  box_size: 10
  border: 4
  output_dir: "data/qr"
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(default_config)
