"""
UI Screens - Full page components with data binding.
The final layer of the atomic design hierarchy.
"""

from .viewer_screen import ViewerScreen

__all__ = [
    'ViewerScreen',
]
