# report.py
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from .models import ValidationResult


@dataclass(frozen=True)
class AccessibilityReport:
    total_elements: int
    accessible_elements: int
    interactive_elements: int
    accessibility_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalElements': self.total_elements,
            'accessibleElements': self.accessible_elements,
            'interactiveElements': self.interactive_elements,
            'accessibilityScore': self.accessibility_score,
        }


def _is_accessible(result: ValidationResult) -> bool:
    child, own = result.child_details, result.details
    semantics = (child is not None and child.has_valid_semantics) or (own is not None and own.has_valid_semantics)
    name = (child and child.accessible_name) or (own and own.accessible_name)
    return bool(semantics and name)


def build_accessibility_report(results: Sequence[ValidationResult]) -> AccessibilityReport:
    located = [r for r in results if r.found or r.child_found]
    accessible = [r for r in located if _is_accessible(r)]
    interactive = [r for r in located if r.interaction_result and r.interaction_result.success]
    score = round(len(accessible) / len(located) * 100) if located else 0
    return AccessibilityReport(
        total_elements=len(located),
        accessible_elements=len(accessible),
        interactive_elements=len(interactive),
        accessibility_score=score,
    )


def summary_message(results: Sequence[ValidationResult], report: AccessibilityReport) -> str:
    if results and all(r.found for r in results):
        return (
            f"Success - {report.total_elements} elements found, "
            f"{report.accessible_elements} accessible, "
            f"{report.interactive_elements} interactive"
        )
    return "Success - one or more elements NOT found"


@dataclass(frozen=True)
class RunReport:
    message: str
    timestamp: str
    accessibility_report: AccessibilityReport
    results: Dict[str, ValidationResult] = field(default_factory=dict)
    screenshot_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'timestamp': self.timestamp,
            'screenshotUrl': self.screenshot_url,
            'accessibilityReport': self.accessibility_report.to_dict(),
            'divTests': {name: result.to_dict() for name, result in self.results.items()},
        }
