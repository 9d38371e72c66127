"""Track Skipper service"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("track-skipper")
except PackageNotFoundError:
    __version__ = "dev"
