"""
Core package for Resend CLI.

This package contains the Resend API client and its supporting types.
"""

__all__ = ["client"]
