# models.py
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Tuple

from .constants import (
    NEARBY_MAX_DISTANCE, NEARBY_MIN_WIDTH, NEARBY_MIN_HEIGHT, MATCH_TOLERANCE,
    CANDIDATE_SELECTOR, SETTLE_DELAY_MS, POLL_INTERVAL_MS, POLL_TIMEOUT_MS,
)


class ElementLike(Protocol):
    async def query_selector(self, selector: str) -> Optional['ElementLike']: ...
    async def is_visible(self) -> bool: ...
    async def evaluate(self, expression: str, arg: Any = None) -> Any: ...
    async def click(self) -> None: ...
    async def focus(self) -> None: ...
    async def hover(self) -> None: ...
    async def press(self, key: str) -> None: ...


class PageLike(Protocol):
    async def query_selector(self, selector: str) -> Optional[ElementLike]: ...
    async def evaluate(self, expression: str, arg: Any = None) -> Any: ...
    async def wait_for_timeout(self, timeout: float) -> None: ...


class InteractionType(str, Enum):
    CLICK = 'click'
    FOCUS = 'focus'
    HOVER = 'hover'
    KEYDOWN = 'keydown'


class ChangeType(str, Enum):
    NONE = 'none'
    DROPDOWN = 'dropdown'
    MODAL = 'modal'
    INPUT_EXPANSION = 'input_expansion'
    CONTENT_EXPANSION = 'content_expansion'
    VISIBILITY_TOGGLE = 'visibility_toggle'
    ARIA_EXPANSION = 'aria_expansion'


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.capitalize() for part in rest)


# Wire names that differ from the plain camelCase of the field
_RENAMES = {
    'interactionTimeMs': 'interactionTime',
    'executionTimeMs': 'executionTime',
}


def _wire_dict(items) -> Dict[str, Any]:
    out = {}
    for key, value in items:
        key = _camel(key)
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, tuple):
            value = list(value)
        out[_RENAMES.get(key, key)] = value
    return out


class _Record:
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self, dict_factory=_wire_dict)


@dataclass(frozen=True)
class ProbeSettings:
    """Tunable thresholds for neighborhood capture, diffing and settling."""
    nearby_distance: float = NEARBY_MAX_DISTANCE
    min_width: float = NEARBY_MIN_WIDTH
    min_height: float = NEARBY_MIN_HEIGHT
    match_tolerance: float = MATCH_TOLERANCE
    candidate_selector: str = CANDIDATE_SELECTOR
    settle_delay_ms: int = SETTLE_DELAY_MS
    poll_until_stable: bool = False
    poll_interval_ms: int = POLL_INTERVAL_MS
    poll_timeout_ms: int = POLL_TIMEOUT_MS
    resolve_labelledby: bool = True


@dataclass(frozen=True)
class AccessibilitySnapshot(_Record):
    tag_name: str
    is_visible: bool
    is_focusable: bool
    aria_attributes: Dict[str, str] = field(default_factory=dict)
    accessible_name: Optional[str] = None
    has_valid_semantics: bool = False


@dataclass(frozen=True)
class ElementRect(_Record):
    top: float
    left: float
    bottom: float
    right: float


@dataclass(frozen=True)
class Box(_Record):
    top: float
    left: float
    width: float
    height: float


@dataclass(frozen=True)
class SiblingInfo(_Record):
    tag_name: str
    class_name: str
    id: str
    is_visible: bool
    has_aria_expanded: bool = False
    aria_expanded: Optional[str] = None


@dataclass(frozen=True)
class NearbyElement(_Record):
    tag_name: str
    class_name: str
    id: str
    is_visible: bool
    position: Box


@dataclass(frozen=True)
class DomSnapshot(_Record):
    element_position: ElementRect
    parent_tag_name: Optional[str]
    siblings: Tuple[SiblingInfo, ...] = ()
    nearby_elements: Tuple[NearbyElement, ...] = ()

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> 'DomSnapshot':
        """Build a snapshot from the plain object returned by the page."""
        return cls(
            element_position=ElementRect(**raw['elementPosition']),
            parent_tag_name=raw.get('parentTagName'),
            siblings=tuple(
                SiblingInfo(
                    tag_name=s['tagName'],
                    class_name=s.get('className') or '',
                    id=s.get('id') or '',
                    is_visible=bool(s.get('isVisible')),
                    has_aria_expanded=bool(s.get('hasAriaExpanded')),
                    aria_expanded=s.get('ariaExpanded'),
                )
                for s in raw.get('siblings', [])
            ),
            nearby_elements=tuple(
                NearbyElement(
                    tag_name=n['tagName'],
                    class_name=n.get('className') or '',
                    id=n.get('id') or '',
                    is_visible=bool(n.get('isVisible')),
                    position=Box(**n['position']),
                )
                for n in raw.get('nearbyElements', [])
            ),
        )


@dataclass(frozen=True)
class InteractionSpec:
    type: InteractionType
    key: Optional[str] = None
    expect_state_change: Optional[bool] = None  # informational only

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InteractionSpec':
        # ValueError for anything outside click/focus/hover/keydown
        return cls(
            type=InteractionType(data['type']),
            key=data.get('key'),
            expect_state_change=data.get('expect_state_change', data.get('expectStateChange')),
        )


@dataclass(frozen=True)
class ElementState:
    focused: bool
    aria_expanded: Optional[str] = None
    aria_pressed: Optional[str] = None
    aria_selected: Optional[str] = None


@dataclass(frozen=True)
class StateChange(_Record):
    focus_changed: bool
    aria_expanded_changed: bool
    aria_pressed_changed: bool
    aria_selected_changed: bool

    @classmethod
    def between(cls, before: ElementState, after: ElementState) -> 'StateChange':
        return cls(
            focus_changed=before.focused != after.focused,
            aria_expanded_changed=before.aria_expanded != after.aria_expanded,
            aria_pressed_changed=before.aria_pressed != after.aria_pressed,
            aria_selected_changed=before.aria_selected != after.aria_selected,
        )


@dataclass(frozen=True)
class VisibilityChange(_Record):
    element: SiblingInfo
    was_visible: bool
    now_visible: bool


@dataclass(frozen=True)
class ExpansionChange(_Record):
    element: SiblingInfo
    was_expanded: Optional[str]
    now_expanded: Optional[str]


@dataclass(frozen=True)
class DomChanges(_Record):
    new_elements: Tuple[NearbyElement, ...] = ()
    changed_visibility: Tuple[VisibilityChange, ...] = ()
    expanded_elements: Tuple[ExpansionChange, ...] = ()
    interaction_type: ChangeType = ChangeType.NONE
    description: str = ''


@dataclass(frozen=True)
class InteractionResult(_Record):
    type: InteractionType
    success: bool
    error: Optional[str]
    interaction_time_ms: int
    state_change: Optional[StateChange]
    accessibility_score: int


@dataclass(frozen=True)
class ValidationResult(_Record):
    found: bool
    details: Optional[AccessibilitySnapshot] = None
    child_found: bool = False
    child_details: Optional[AccessibilitySnapshot] = None
    interaction_result: Optional[InteractionResult] = None
    dom_changes: Optional[DomChanges] = None
    execution_time_ms: int = 0


@dataclass(frozen=True)
class ProbeTarget:
    name: str
    selector: str
    description: Optional[str] = None
    child_selector: Optional[str] = None
    interaction: Optional[InteractionSpec] = None
