# interactions.py
import time
from typing import Optional, Tuple

from .constants import logger
from .dom_diff import analyze_dom_changes
from .models import (
    DomChanges, DomSnapshot, ElementLike, ElementState, InteractionResult,
    InteractionSpec, InteractionType, PageLike, ProbeSettings, StateChange,
)
from .scoring import calculate_accessibility_score
from .snapshots import capture_nearby_elements
from .utils import elapsed_ms

_STATE_JS = '''
(el) => ({
  focused: el === document.activeElement,
  ariaExpanded: el.getAttribute('aria-expanded'),
  ariaPressed: el.getAttribute('aria-pressed'),
  ariaSelected: el.getAttribute('aria-selected')
})
'''


async def read_element_state(element: ElementLike) -> ElementState:
    raw = await element.evaluate(_STATE_JS)
    return ElementState(
        focused=bool(raw.get('focused')),
        aria_expanded=raw.get('ariaExpanded'),
        aria_pressed=raw.get('ariaPressed'),
        aria_selected=raw.get('ariaSelected'),
    )


async def dispatch_interaction(element: ElementLike, spec: InteractionSpec):
    if spec.type == InteractionType.CLICK:
        await element.click()
    elif spec.type == InteractionType.FOCUS:
        await element.focus()
    elif spec.type == InteractionType.HOVER:
        await element.hover()
    elif spec.type == InteractionType.KEYDOWN:
        await element.focus()
        if spec.key:
            await element.press(spec.key)
        else:
            logger.warning("keydown interaction without a key, only focusing")


async def wait_for_settle(page: PageLike, element: ElementLike, settings: ProbeSettings) -> DomSnapshot:
    """Let asynchronous UI updates land, then return the neighborhood snapshot.

    The default is a single fixed pause. With ``poll_until_stable`` the
    neighborhood is re-captured every ``poll_interval_ms`` until two
    consecutive captures agree or ``poll_timeout_ms`` runs out.
    """
    if not settings.poll_until_stable:
        await page.wait_for_timeout(settings.settle_delay_ms)
        return await capture_nearby_elements(page, element, settings)

    start = time.perf_counter()
    await page.wait_for_timeout(settings.poll_interval_ms)
    previous = await capture_nearby_elements(page, element, settings)
    while elapsed_ms(start) < settings.poll_timeout_ms:
        await page.wait_for_timeout(settings.poll_interval_ms)
        current = await capture_nearby_elements(page, element, settings)
        if current == previous:
            return current
        previous = current
    logger.debug(f"DOM did not settle within {settings.poll_timeout_ms}ms")
    return previous


async def perform_interaction(
    page: PageLike,
    element: ElementLike,
    spec: InteractionSpec,
    initial_snapshot: DomSnapshot,
    settings: Optional[ProbeSettings] = None,
) -> Tuple[InteractionResult, Optional[DomChanges]]:
    settings = settings or ProbeSettings()
    start = time.perf_counter()
    success = False
    error = None
    state_change = None
    dom_changes = None
    try:
        initial_state = await read_element_state(element)
        await dispatch_interaction(element, spec)
        final_snapshot = await wait_for_settle(page, element, settings)
        final_state = await read_element_state(element)
        dom_changes = analyze_dom_changes(initial_snapshot, final_snapshot, settings)
        state_change = StateChange.between(initial_state, final_state)
        success = True
    except Exception as e:
        # one broken element must not abort the remaining probes
        error = str(e)
        state_change = None
        dom_changes = None
        logger.warning(f"{spec.type.value} interaction failed: {error}")

    result = InteractionResult(
        type=spec.type,
        success=success,
        error=error,
        interaction_time_ms=elapsed_ms(start),
        state_change=state_change,
        accessibility_score=calculate_accessibility_score(state_change, success, dom_changes),
    )
    return result, dom_changes
