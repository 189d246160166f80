"""
Pointer/zoom/resize handling: view state, hit-testing and the interaction
controller.
"""

from .view_state import ViewState, visible_placements
from .hit_tester import HitTester
from .controller import (
    InteractionController, PointerMove, PointerClick, PointerLeave, Dismiss,
    ToggleCategory, ShowAllCategories, ZoomTo, Resize
)

__all__ = [
    'ViewState',
    'visible_placements',
    'HitTester',
    'InteractionController',
    'PointerMove',
    'PointerClick',
    'PointerLeave',
    'Dismiss',
    'ToggleCategory',
    'ShowAllCategories',
    'ZoomTo',
    'Resize',
]
