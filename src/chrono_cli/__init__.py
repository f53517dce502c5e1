"""chrono - project detection and deployment metadata CLI."""

__version__ = "0.3.0"
