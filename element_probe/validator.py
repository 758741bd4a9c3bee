# validator.py
import time
from typing import List, Optional, Sequence

from .accessibility import analyze_accessibility
from .constants import logger
from .interactions import perform_interaction
from .models import (
    InteractionSpec, PageLike, ProbeSettings, ProbeTarget, ValidationResult,
)
from .snapshots import capture_nearby_elements
from .utils import elapsed_ms


async def validate_element(
    page: PageLike,
    selector: str,
    description: Optional[str] = None,
    child_selector: Optional[str] = None,
    interaction: Optional[InteractionSpec] = None,
    settings: Optional[ProbeSettings] = None,
) -> ValidationResult:
    """Probe one element: locate, analyze, snapshot, interact, diff and score.

    A missing container or child and a failed interaction are reported in the
    returned record. Only failures of the page itself propagate.
    """
    settings = settings or ProbeSettings()
    start = time.perf_counter()
    label = description or selector

    container = await page.query_selector(selector)
    if not container:
        logger.info(f"{label} container NOT found")
        return ValidationResult(found=False, execution_time_ms=elapsed_ms(start))

    details = await analyze_accessibility(container, settings)
    logger.info(f"{label} container found")
    initial_snapshot = await capture_nearby_elements(page, container, settings)

    child_found = False
    child_details = None
    interaction_result = None
    dom_changes = None

    if child_selector:
        child = await container.query_selector(child_selector)
        child_found = bool(child)
        if child_found:
            child_details = await analyze_accessibility(child, settings)
            logger.info(f"Child element found within {label}")
            if interaction:
                interaction_result, dom_changes = await perform_interaction(
                    page, child, interaction, initial_snapshot, settings
                )
        else:
            logger.info(f"Child element NOT found within {label}")
    elif interaction:
        interaction_result, dom_changes = await perform_interaction(
            page, container, interaction, initial_snapshot, settings
        )

    if interaction_result:
        logger.info(
            f"{label}: {interaction_result.type.value} "
            f"{'succeeded' if interaction_result.success else 'failed'}, "
            f"score {interaction_result.accessibility_score}"
        )

    return ValidationResult(
        found=True,
        details=details,
        child_found=child_found,
        child_details=child_details,
        interaction_result=interaction_result,
        dom_changes=dom_changes,
        execution_time_ms=elapsed_ms(start),
    )


async def validate_elements(page: PageLike, targets: Sequence[ProbeTarget], settings: Optional[ProbeSettings] = None) -> List[ValidationResult]:
    # Sequential on purpose: an opened menu can cover or shift the next target.
    results = []
    for target in targets:
        result = await validate_element(
            page,
            target.selector,
            target.description,
            target.child_selector,
            target.interaction,
            settings,
        )
        results.append(result)
    return results
