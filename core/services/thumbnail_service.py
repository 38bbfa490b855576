"""
Thumbnail generation service.

Resizes an image to a fixed width, keeping its aspect ratio and its
original format (PNG stays PNG, JPEG stays JPEG).
"""
from __future__ import annotations

import io

from PIL import Image

DEFAULT_WIDTHS = (500, 250, 100)


class ThumbnailService:
    """
    Service for generating width-bounded thumbnails.

    Example:
        >>> service = ThumbnailService()
        >>> thumb = service.generate(png_bytes, 250)
        >>> # thumb is PNG bytes 250 pixels wide
    """

    FALLBACK_FORMAT = 'PNG'
    QUALITY = 85

    def __init__(self, widths: tuple[int, ...] | list[int] = DEFAULT_WIDTHS):
        self.widths = tuple(widths)

    def generate(self, source: bytes, width: int) -> bytes:
        """
        Generate a thumbnail `width` pixels wide.

        Args:
            source: Encoded image bytes
            width: Target width in pixels

        Returns:
            Encoded thumbnail bytes in the source format
        """
        img = Image.open(io.BytesIO(source))
        fmt = img.format or self.FALLBACK_FORMAT

        w, h = img.size
        new_h = max(1, round(h * width / w))
        thumb = img.resize((width, new_h), Image.Resampling.LANCZOS)

        # JPEG can't store alpha or palette images
        if fmt == 'JPEG' and thumb.mode not in ('RGB', 'L'):
            thumb = thumb.convert('RGB')

        output = io.BytesIO()
        if fmt == 'JPEG':
            thumb.save(output, format=fmt, quality=self.QUALITY, optimize=True)
        else:
            thumb.save(output, format=fmt)
        return output.getvalue()
