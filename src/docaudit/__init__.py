"""docaudit: rule-driven documentation and structure auditing."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("docaudit")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
