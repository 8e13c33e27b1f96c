"""filess.io infrastructure provider: managed database lifecycle over the filess.io REST API."""

__version__ = "0.1.0"
