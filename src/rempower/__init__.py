"""Python empowered macOS system utilities."""

__version__ = "0.1.0"
