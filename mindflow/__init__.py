"""MindFlow - AI-generated visual courses."""

__version__ = "1.0.0"
