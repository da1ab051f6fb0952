"""Review treatment configuration.

This module centralizes how annotation severity maps to a cell's visual
treatment. Adjust these constants to restyle the table without touching the
resolver.

Treatments:
    - "valid": Field has no annotation
    - "warning": Moderate emphasis, review suggested
    - "critical": High emphasis, the value is wrong
    - "neutral": Annotation with an unrecognised severity; still highlighted
      so the message is not lost, but without claiming a severity
"""

from __future__ import annotations

from typing import Dict, Union

from data_review.core.enums import Severity, Treatment

# ============================================================================
# TREATMENT STYLES
# ============================================================================
# Format: {treatment: {"css_class", "icon", "label"}}
# Every entry must differ from every other in all three attributes.

TREATMENT_STYLES: Dict[Treatment, Dict[str, str]] = {
    Treatment.VALID: {
        "css_class": "cell-valid bg-green-50 text-green-800",
        "icon": "✅",
        "label": "valid",
    },
    Treatment.WARNING: {
        "css_class": "cell-warning bg-yellow-100 text-yellow-900",
        "icon": "⚠️",
        "label": "warning",
    },
    Treatment.CRITICAL: {
        "css_class": "cell-critical bg-red-200 text-red-900 font-bold",
        "icon": "❌",
        "label": "critical",
    },
    Treatment.NEUTRAL: {
        "css_class": "cell-neutral bg-gray-200 text-gray-900 italic",
        "icon": "❔",
        "label": "unrecognised severity",
    },
}


# ============================================================================
# SEVERITY RULES
# ============================================================================

SEVERITY_TREATMENTS: Dict[Severity, Treatment] = {
    Severity.WARNING: Treatment.WARNING,
    Severity.CRITICAL: Treatment.CRITICAL,
}

# Cells without any annotation
VALID_TREATMENT = Treatment.VALID

# Annotated cells whose severity is not in SEVERITY_TREATMENTS
FALLBACK_TREATMENT = Treatment.NEUTRAL


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def style(severity: Union[Severity, str, None]) -> Treatment:
    """Get the treatment for an annotation severity.

    Total over its input: unrecognised values get FALLBACK_TREATMENT.

    Args:
        severity: Parsed Severity or the raw severity string.

    Returns:
        Treatment for an annotated cell. Never VALID_TREATMENT.

    Examples:
        >>> style("warning")
        <Treatment.WARNING: 'warning'>
        >>> style("banana")
        <Treatment.NEUTRAL: 'neutral'>
    """
    if not isinstance(severity, Severity):
        severity = Severity.parse(severity)
    return SEVERITY_TREATMENTS.get(severity, FALLBACK_TREATMENT)


def get_style_attributes(treatment: Treatment) -> Dict[str, str]:
    """Get the css class, icon and label for a treatment.

    Raises:
        ValueError: If the treatment has no configured style.
    """
    if treatment not in TREATMENT_STYLES:
        raise ValueError(f"No style configured for treatment: {treatment}")
    return dict(TREATMENT_STYLES[treatment])
