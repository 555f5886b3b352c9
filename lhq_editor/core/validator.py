from __future__ import annotations

"""Element name validation used before creating or renaming tree elements."""

import re
from typing import Any, Literal, Optional

from .search import get_element_full_path

__all__ = [
    "NameValidatorFlags",
    "NameValidatorResult",
    "validate_name",
    "validate_tree_element_name",
]

NameValidatorFlags = Literal["none", "allowEmpty"]
NameValidatorResult = Literal[
    "valid",
    "nameIsEmpty",
    "nameCannotBeginWithNumber",
    "nameCanContainOnlyAlphaNumeric",
]

_STARTS_WITH_NUMBERS = re.compile(r"[0-9]+[a-zA-Z0-9]*")
_VALID_CHARACTERS = re.compile(r"[a-zA-Z]+[a-zA-Z0-9_]*")

_MESSAGES = {
    "nameIsEmpty": "Name cannot be empty.",
    "nameCannotBeginWithNumber": "Name cannot start with a number.",
    "nameCanContainOnlyAlphaNumeric": "Name can only contain alphanumeric characters and underscores.",
}


def validate_name(name: Optional[str], flags: NameValidatorFlags = "none") -> NameValidatorResult:
    """Validate an element name.

    Rules apply in order, the first that matches decides: empty name, leading
    digits, then the general ``letter (letter|digit|_)*`` shape.
    """
    if not name:
        return "valid" if flags == "allowEmpty" else "nameIsEmpty"
    if _STARTS_WITH_NUMBERS.fullmatch(name):
        return "nameCannotBeginWithNumber"
    if not _VALID_CHARACTERS.fullmatch(name):
        return "nameCanContainOnlyAlphaNumeric"
    return "valid"


def validate_tree_element_name(
    element_type: str,
    name: Optional[str],
    parent_element: Optional[Any] = None,
    ignore_element_path: Optional[str] = None,
) -> Optional[str]:
    """Return a user-facing error message for ``name``, or None when valid.

    With ``parent_element`` given, a sibling of the same ``element_type`` and
    name is reported as a duplicate unless its full path equals
    ``ignore_element_path`` (the element being renamed).
    """
    result = validate_name(name)
    if result != "valid":
        return _MESSAGES[result]

    if parent_element is not None and name:
        found = parent_element.find(name, element_type)
        if found is not None and (not ignore_element_path or get_element_full_path(found) != ignore_element_path):
            where = "/" if parent_element.element_type == "model" else get_element_full_path(parent_element)
            return f"{element_type} '{name}' already exists in {where}"
    return None
