# scoring.py
from typing import Optional

from .models import ChangeType, DomChanges, StateChange

BASE_SCORE = 50
MAX_SCORE = 100


def calculate_accessibility_score(state_change: Optional[StateChange], success: bool, dom_changes: Optional[DomChanges]) -> int:
    if not success:
        return 0
    score = BASE_SCORE
    if state_change:
        # focus movement is the signal assistive technology relies on most
        if state_change.focus_changed:
            score += 20
        if state_change.aria_expanded_changed:
            score += 15
        if state_change.aria_pressed_changed:
            score += 10
        if state_change.aria_selected_changed:
            score += 5
    if dom_changes and dom_changes.interaction_type != ChangeType.NONE:
        score += 10
        if dom_changes.expanded_elements:
            score += 5
    return min(score, MAX_SCORE)
