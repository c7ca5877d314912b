"""Command-line interface for toastbox."""
