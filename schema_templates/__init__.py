"""Generate project templates from provider package schemas."""

__version__ = "0.1.0"
