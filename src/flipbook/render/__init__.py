"""Rendering pipeline turning a document into an ordered page sequence."""

from .base import CancellationToken, Page, PageSequence, RasterImage, Rasterizer, RenderStatus
from .pipeline import RenderPipeline, RenderSession
from .rasterizer import PdfRasterizer

__all__ = [
    "CancellationToken",
    "Page",
    "PageSequence",
    "PdfRasterizer",
    "RasterImage",
    "Rasterizer",
    "RenderPipeline",
    "RenderSession",
    "RenderStatus",
]
