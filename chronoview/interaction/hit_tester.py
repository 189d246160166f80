"""
Hit Tester - Resolves pointer positions to timeline events.
"""

import math

from chronoview.interaction.view_state import visible_placements


class HitTester:
    """
    Finds the event nearest to a pointer.

    Works on exactly the placements the renderer draws, so a pointer over a
    drawn dot always resolves to that dot's event.
    """

    # Extra pixels around a dot that still count as a hit
    HIT_TOLERANCE = 10

    def __init__(self, events):
        """
        Initialize the hit tester.

        Args:
            events (list): Full dataset in dataset order
        """
        self.events = events

    def hit_test(self, x, y, state):
        """
        Find the event under a pointer.

        Placements are scanned in dataset order and only a strictly smaller
        distance replaces the current best, so ties go to the event that
        comes first in the dataset.

        Args:
            x (float): Pointer x in logical pixels
            y (float): Pointer y in logical pixels
            state (ViewState): Current view state

        Returns:
            Event or None: Nearest event within its hit radius
        """
        best_event = None
        best_distance = math.inf

        for placement in visible_placements(self.events, state):
            distance = math.hypot(placement.x - x, placement.y - y)
            if distance >= placement.radius + self.HIT_TOLERANCE:
                continue
            if distance < best_distance:
                best_distance = distance
                best_event = placement.event

        return best_event
