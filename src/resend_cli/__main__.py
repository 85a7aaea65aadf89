"""
Entry point for running Resend CLI as a module.

This allows users to run the CLI using:
    python -m resend_cli [command] [options]
"""

from resend_cli.cli.app import main

if __name__ == "__main__":
    main()
