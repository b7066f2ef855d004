"""Lightweight `{key}` string interpolation."""

from typing import Mapping


def interpolate(template: str, replacements: Mapping[str, object]) -> str:
    """Replace every `{key}` in template with the matching replacement.

    Keys are substituted in mapping order and each occurrence is replaced,
    so a replacement value containing another placeholder may be expanded
    by a later key.
    """
    result = template
    for key, value in replacements.items():
        result = result.replace(f"{{{key}}}", str(value))
    return result
