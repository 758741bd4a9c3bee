# dom_diff.py
from typing import List, Optional, Tuple

from .models import (
    ChangeType, DomChanges, DomSnapshot, ExpansionChange, NearbyElement,
    ProbeSettings, VisibilityChange,
)

_LIST_TAGS = ('UL', 'OL')


def _persisted(element: NearbyElement, previous: List[NearbyElement], tolerance: float) -> bool:
    return any(
        old.class_name == element.class_name
        and old.tag_name == element.tag_name
        and abs(old.position.top - element.position.top) < tolerance
        for old in previous
    )


def _classify_new_element(element: NearbyElement, count: int) -> Tuple[ChangeType, str]:
    tag = element.tag_name.upper()
    css = element.class_name.lower()
    if tag in _LIST_TAGS or 'dropdown' in css or 'menu' in css:
        return ChangeType.DROPDOWN, f"Opened dropdown with {count} new elements"
    if 'modal' in css or 'dialog' in css:
        return ChangeType.MODAL, f"Opened modal dialog with {count} new elements"
    if tag == 'INPUT' or 'input' in css:
        return ChangeType.INPUT_EXPANSION, f"Expanded input field with {count} new elements"
    return ChangeType.CONTENT_EXPANSION, f"Revealed additional content with {count} new elements"


def analyze_dom_changes(before: DomSnapshot, after: DomSnapshot, settings: Optional[ProbeSettings] = None) -> DomChanges:
    """Compare two neighborhood snapshots and classify what the interaction did.

    Nearby elements are matched by tag, class and vertical position; siblings
    are matched by index. The first matching rule of the cascade
    new element > visibility toggle > aria-expanded change decides the type.
    """
    settings = settings or ProbeSettings()

    previously_visible = [el for el in before.nearby_elements if el.is_visible]
    new_elements = [
        el for el in after.nearby_elements
        if el.is_visible and not _persisted(el, previously_visible, settings.match_tolerance)
    ]

    changed_visibility = []
    expanded_elements = []
    for index, sibling in enumerate(after.siblings):
        if index >= len(before.siblings):
            break
        old = before.siblings[index]
        if old.is_visible != sibling.is_visible:
            changed_visibility.append(VisibilityChange(sibling, old.is_visible, sibling.is_visible))
        if old.aria_expanded != sibling.aria_expanded:
            expanded_elements.append(ExpansionChange(sibling, old.aria_expanded, sibling.aria_expanded))

    if new_elements:
        interaction_type, description = _classify_new_element(new_elements[0], len(new_elements))
    elif changed_visibility:
        interaction_type = ChangeType.VISIBILITY_TOGGLE
        description = f"Toggled visibility of {len(changed_visibility)} elements"
    elif expanded_elements:
        interaction_type = ChangeType.ARIA_EXPANSION
        description = f"Changed aria-expanded state of {len(expanded_elements)} elements"
    else:
        interaction_type, description = ChangeType.NONE, ''

    return DomChanges(
        new_elements=tuple(new_elements),
        changed_visibility=tuple(changed_visibility),
        expanded_elements=tuple(expanded_elements),
        interaction_type=interaction_type,
        description=description,
    )
