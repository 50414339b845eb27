"""Chat proxy between a portfolio website and the Anthropic Messages API."""

__version__ = "0.1.0"
