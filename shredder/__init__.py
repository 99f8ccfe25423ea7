"""Client-side metadata and secret shredder for images, PDFs and text files."""

__version__ = "0.1.0"
