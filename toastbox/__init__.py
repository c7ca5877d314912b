"""
toastbox - transient notification (toast) lifecycle manager.
"""

__version__ = "0.1.0"
__logo__ = "🍞"
