"""Strip ancillary chunks from PNG files in bulk."""

__version__ = "0.1.0"
