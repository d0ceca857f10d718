"""sigtable: canonical signature-to-declaration lookup tables."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sigtable")
except PackageNotFoundError:
    __version__ = "dev"
