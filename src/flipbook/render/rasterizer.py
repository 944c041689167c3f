"""PyMuPDF page rasterizer.

:class:`PdfRasterizer` renders one page of an opened document at a fixed scale
factor and encodes it as PNG.  The pixmap is sized to the page's natural
rectangle (in PDF points) multiplied by the scale and lives only for the
duration of the call.  Any failure is reported as a single
:class:`~flipbook.utils.errors.RenderFailure`; a partially rendered image is
never returned.
"""

from __future__ import annotations

import fitz

from flipbook.utils.constants import DEFAULT_SCALE
from flipbook.utils.errors import RenderFailure

from .base import DocumentHandle, RasterImage

__all__ = ["PdfRasterizer"]


class PdfRasterizer:
    """Render document pages to PNG bytes at ``scale`` times their natural size."""

    def __init__(self, scale: float = DEFAULT_SCALE) -> None:
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.scale = scale
        self._matrix = fitz.Matrix(scale, scale)

    def rasterize(self, document: DocumentHandle, ordinal: int) -> RasterImage:
        """Render the 1-based page ``ordinal`` of ``document``.

        The aspect ratio is taken from the page rectangle, which already
        reflects the page rotation, so it does not depend on the scale or on
        pixel rounding.
        """

        if not 1 <= ordinal <= document.page_count:
            raise RenderFailure(ordinal, f"page out of range 1..{document.page_count}")
        try:
            page = document.load_page(ordinal - 1)  # type: ignore[attr-defined]
            rect = page.rect
            pix = page.get_pixmap(matrix=self._matrix, alpha=False)
            data = pix.tobytes("png")
        except Exception as exc:
            raise RenderFailure(ordinal, str(exc) or type(exc).__name__) from exc
        if rect.width <= 0 or rect.height <= 0 or not data:
            raise RenderFailure(ordinal, "empty page")
        return RasterImage(
            image=data,
            aspect_ratio=rect.width / rect.height,
            width=pix.width,
            height=pix.height,
        )
