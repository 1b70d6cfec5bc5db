"""
Media collaborators.

- images: downscale owner/finder photos to compact JPEG data URLs
- qr: render an item id as a scannable QR code

Decoding QR codes from camera frames is left to the capturing device.
"""

from .images import MediaError, compress_photo, photo_to_data_url
from .qr import qr_filename, render_item_qr, save_item_qr

__all__ = [
    "MediaError",
    "compress_photo",
    "photo_to_data_url",
    "qr_filename",
    "render_item_qr",
    "save_item_qr",
]
