"""Directory bundling utilities.

This package walks one or more directory trees and concatenates the text of
every admitted file into a single artifact, ready to paste into an AI chat or
any other text-consuming tool.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("treeclip")
except PackageNotFoundError:
    __version__ = "unknown"
