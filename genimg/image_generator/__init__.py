from .base import ImageGenerator

__all__ = ["ImageGenerator"]
