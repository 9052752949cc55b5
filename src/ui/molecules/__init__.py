"""
UI Molecules - Combinations of atoms.
"""

from .action_button import ActionButton
from .text_field import TextField

__all__ = [
    'ActionButton',
    'TextField',
]
