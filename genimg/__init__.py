"""
genimg: procedural 2D generative art rendered to PNG.
"""
__version__ = "0.1.0"
