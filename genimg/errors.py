"""
Errors raised at the canvas/file boundary. Pure helpers never raise these; they return
None or a fallback instead, and the pipeline catches these per image.
"""


class GenImgError(Exception):
    """Base class for genimg errors."""


class CanvasError(GenImgError):
    """Canvas could not be allocated or encoded."""


class OutputDirError(GenImgError):
    """Output directory could not be created."""
