"""
Configuration package for Resend CLI.

This package contains the settings model and the credential store that
persists the API key between invocations.
"""

__all__ = ["settings", "store"]
