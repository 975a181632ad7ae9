"""Ad report text analysis and ad-script generation."""

__version__ = "0.1.0"
