"""Count circular objects in images with Hough detection and manual corrections."""

__version__ = "0.1.0"
__all__ = ["__version__"]