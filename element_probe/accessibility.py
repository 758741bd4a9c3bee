# accessibility.py
from typing import Optional

from .constants import NATIVE_INTERACTIVE_TAGS
from .models import AccessibilitySnapshot, ElementLike, ProbeSettings

_ANALYZE_JS = '''
(el, opts) => {
  const aria = {};
  for (const attr of Array.from(el.attributes)) {
    if (attr.name.startsWith('aria-') || attr.name === 'role') {
      aria[attr.name] = attr.value;
    }
  }
  let labelledBy = el.getAttribute('aria-labelledby');
  if (labelledBy && opts.resolveLabelledBy) {
    const referenced = labelledBy.split(/\\s+/)
      .map(id => document.getElementById(id))
      .filter(Boolean)
      .map(node => (node.textContent || '').trim())
      .filter(Boolean)
      .join(' ');
    if (referenced) labelledBy = referenced;
  }
  const text = (el.innerText || '').trim();
  const isNative = opts.nativeTags.includes(el.tagName);
  return {
    tagName: el.tagName,
    isFocusable: el.tabIndex >= 0 || isNative || el.hasAttribute('tabindex'),
    ariaAttributes: aria,
    accessibleName: el.getAttribute('aria-label') ||
      labelledBy ||
      el.getAttribute('alt') ||
      el.getAttribute('title') ||
      text ||
      null,
    hasValidSemantics: isNative || el.hasAttribute('role')
  };
}
'''


async def analyze_accessibility(element: ElementLike, settings: Optional[ProbeSettings] = None) -> AccessibilitySnapshot:
    settings = settings or ProbeSettings()
    raw = await element.evaluate(_ANALYZE_JS, {
        'resolveLabelledBy': settings.resolve_labelledby,
        'nativeTags': NATIVE_INTERACTIVE_TAGS,
    })
    is_visible = await element.is_visible()
    return AccessibilitySnapshot(
        tag_name=raw.get('tagName', ''),
        is_visible=bool(is_visible),
        is_focusable=bool(raw.get('isFocusable')),
        aria_attributes=dict(raw.get('ariaAttributes') or {}),
        accessible_name=raw.get('accessibleName') or None,
        has_valid_semantics=bool(raw.get('hasValidSemantics')),
    )
