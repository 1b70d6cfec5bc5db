"""Photo downscaling for storage inside the store blob."""

import base64
import io
import logging

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_MAX_WIDTH = 800
DEFAULT_QUALITY = 80


class MediaError(Exception):
    """Raised when an image or code cannot be produced."""

    pass


def compress_photo(data: bytes, max_width: int = DEFAULT_MAX_WIDTH, quality: int = DEFAULT_QUALITY) -> bytes:
    """Downscale to max_width (never upscale) and encode as JPEG."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise MediaError(f"Unreadable image: {e}") from e

    img = img.convert("RGB")

    # Resize while keeping aspect ratio
    w, h = img.size
    if w > max_width:
        new_height = max(1, round(h * (max_width / w)))
        img = img.resize((max_width, new_height), Image.LANCZOS)
        logger.debug(f"Downscaled photo from {w}x{h} to {max_width}x{new_height}")

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=quality, optimize=True)
    return buffer.getvalue()


def photo_to_data_url(
    data: bytes, max_width: int = DEFAULT_MAX_WIDTH, quality: int = DEFAULT_QUALITY
) -> str:
    """Compress a photo and wrap it as a JPEG data URL."""
    encoded = base64.b64encode(compress_photo(data, max_width, quality)).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"
