"""macOS DNS switching helpers."""

# Submodules are imported explicitly by callers so that importing the package
# does not construct the default shell, reader and writer.

__all__: list[str] = []
