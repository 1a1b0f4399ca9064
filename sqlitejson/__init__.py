"""sqlitejson: export SQLite tables and queries as JSON."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sqlitejson")
except PackageNotFoundError:
    # Package is not installed, use fallback
    __version__ = "0.0.0.dev"


def __getattr__(name):
    """Lazy imports to keep ``import sqlitejson`` cheap."""
    if name in ("Exporter", "open_exporter", "ExportRequest"):
        from sqlitejson import export

        return getattr(export, name)
    if name == "cli_app":
        from sqlitejson.cli import app as cli_app

        return cli_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["__version__", "Exporter", "ExportRequest", "cli_app", "open_exporter"]
