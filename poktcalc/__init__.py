__version__ = "0.1.0"
version_split = __version__.split(".")
if len(version_split) < 3:
    raise ValueError(
        f"Version string '{__version__}' must be in format 'X.Y.Z' (e.g., '0.0.0')"
    )
