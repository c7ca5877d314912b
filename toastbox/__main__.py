"""
Entry point for running toastbox as a module: python -m toastbox
"""

from toastbox.cli.commands import app

if __name__ == "__main__":
    app()
