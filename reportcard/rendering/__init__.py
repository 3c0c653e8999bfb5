"""PDF rendering of student reports."""

from __future__ import annotations

from .config import RendererConfig
from .errors import RendererError, ReportCleanupError, ReportRenderingError
from .pdf import PdfReportRenderer

__all__ = [
    "PdfReportRenderer",
    "RendererConfig",
    "RendererError",
    "ReportCleanupError",
    "ReportRenderingError",
]
