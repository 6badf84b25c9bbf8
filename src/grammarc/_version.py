"""Version of the installed grammarc distribution."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("grammarc")
except PackageNotFoundError:
    # Source tree on sys.path without an install (editable or not)
    __version__ = "0.0.0+unknown"
