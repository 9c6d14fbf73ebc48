"""
Polish spell-check diagnostics and fuzzy completion for language server clients.
"""

__version__ = "0.1.0"
