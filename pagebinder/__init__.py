"""pagebinder: capture web pages as PDFs and bind them into one document."""

__version__ = "0.1.0"
