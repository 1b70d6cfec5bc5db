"""QR codes carrying an item id."""

import io
import logging
from pathlib import Path

import qrcode
from qrcode.exceptions import DataOverflowError

from .images import MediaError

logger = logging.getLogger(__name__)


def render_item_qr(item_id: str, box_size: int = 10, border: int = 4) -> bytes:
    """PNG bytes of a QR code whose payload is the item id."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    try:
        qr.add_data(str(item_id))
        qr.make(fit=True)
    except DataOverflowError as e:
        raise MediaError(f"Item id too long for a QR code: {e}") from e
    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def qr_filename(item_id: str) -> str:
    return f"item-{item_id}-qr.png"


def save_item_qr(item_id: str, output_dir: Path, box_size: int = 10, border: int = 4) -> Path:
    """Write the item's QR code into output_dir. Returns the file path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / qr_filename(item_id)
    path.write_bytes(render_item_qr(item_id, box_size=box_size, border=border))
    logger.info(f"Wrote QR code for item {item_id} to {path}")
    return path
