"""Output generation for recommendations (PDF, debug text)."""

from smartslots.output.debug_generator import DebugGenerator
from smartslots.output.pdf_generator import PDFGenerator

__all__ = [
    "DebugGenerator",
    "PDFGenerator",
]
