# snapshots.py
from typing import Optional

from .models import DomSnapshot, ElementLike, PageLike, ProbeSettings

# Menus, popovers and tooltips are often portal-appended far from the trigger
# in the DOM, so nearby candidates are picked by geometry, not ancestry.
_NEIGHBORHOOD_JS = '''
([el, opts]) => {
  const classOf = node => typeof node.className === 'string'
    ? node.className
    : (node.getAttribute('class') || '');
  const rect = el.getBoundingClientRect();
  const parent = el.parentElement;
  const nearby = [];
  for (const candidate of Array.from(document.querySelectorAll(opts.candidateSelector))) {
    if (candidate === el || el.contains(candidate) || candidate.contains(el)) continue;
    const box = candidate.getBoundingClientRect();
    const isNearby = Math.abs(box.top - rect.bottom) < opts.nearbyDistance &&
      Math.abs(box.left - rect.left) < opts.nearbyDistance;
    if (isNearby && box.width > opts.minWidth && box.height > opts.minHeight) {
      nearby.push({
        tagName: candidate.tagName,
        className: classOf(candidate),
        id: candidate.id,
        isVisible: candidate.offsetParent !== null,
        position: { top: box.top, left: box.left, width: box.width, height: box.height }
      });
    }
  }
  return {
    elementPosition: { top: rect.top, left: rect.left, bottom: rect.bottom, right: rect.right },
    parentTagName: parent ? parent.tagName : null,
    siblings: Array.from(parent ? parent.children : []).map(sibling => ({
      tagName: sibling.tagName,
      className: classOf(sibling),
      id: sibling.id,
      isVisible: sibling.offsetParent !== null,
      hasAriaExpanded: sibling.hasAttribute('aria-expanded'),
      ariaExpanded: sibling.getAttribute('aria-expanded')
    })),
    nearbyElements: nearby
  };
}
'''


async def capture_nearby_elements(page: PageLike, element: ElementLike, settings: Optional[ProbeSettings] = None) -> DomSnapshot:
    settings = settings or ProbeSettings()
    raw = await page.evaluate(_NEIGHBORHOOD_JS, [element, {
        'candidateSelector': settings.candidate_selector,
        'nearbyDistance': settings.nearby_distance,
        'minWidth': settings.min_width,
        'minHeight': settings.min_height,
    }])
    return DomSnapshot.from_raw(raw)
