"""
Terminal output helpers for Shadow Search.

Modules:
- display_utils: Verbosity levels and move/search formatting
"""

from .display_utils import GameDisplay, VerbosityLevel, format_move

__all__ = [
    'GameDisplay',
    'VerbosityLevel',
    'format_move'
]
