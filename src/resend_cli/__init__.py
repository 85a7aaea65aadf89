"""
Resend CLI - A command-line client for the Resend email API.

This package provides a command-line interface for sending emails and
inspecting sent and received emails through the Resend HTTP API.
"""

__version__ = "0.1.0"
__author__ = "Resend CLI Team"
__license__ = "Apache-2.0"

from typing import Final

# Package metadata
VERSION: Final[str] = __version__
PACKAGE_NAME: Final[str] = "resend-cli"
USER_AGENT: Final[str] = f"{PACKAGE_NAME}/{VERSION}"

__all__ = [
    "__version__",
    "VERSION",
    "PACKAGE_NAME",
    "USER_AGENT",
]
