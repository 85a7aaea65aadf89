"""
CLI interface package for Resend CLI.

This package contains the command-line interface components: the Typer
application, input validation and output formatting.
"""

__all__ = ["app", "inputs", "output"]
