from __future__ import annotations

"""Path resolution and substring matching over the resource tree.

A slash-delimited address is split into segments. Every segment but the last
names a category to descend into; the last one is matched as a substring
pattern against all child categories and resources of the node reached.
One traversal therefore serves both exact-path navigation and "find in tree".
"""

import re
from dataclasses import dataclass
from typing import Any, List, Literal, Optional, Sequence, Tuple, Union

from .models import TreeElement, TreeElementPaths

__all__ = [
    "MatchKind",
    "MatchForSubstringResult",
    "MatchingElement",
    "match_for_substring",
    "find_childs_by_paths",
    "resolve",
    "create_tree_element_paths",
    "get_element_full_path",
    "is_category_like_tree_element",
    "is_subset_of_array",
    "str_compare",
]

MatchKind = Literal["equal", "contains", "none"]


@dataclass(frozen=True)
class MatchForSubstringResult:
    """Outcome of :func:`match_for_substring`.

    Attributes
    ----------
    match
        ``equal``, ``contains`` or ``none``.
    highlights
        ``[start, end)`` index pairs into the matched value; None when
        ``match`` is ``none``.
    """

    match: MatchKind = "none"
    highlights: Optional[Tuple[Tuple[int, int], ...]] = None


@dataclass(frozen=True)
class MatchingElement:
    element: Any
    match: MatchForSubstringResult
    leaf: bool


_NO_MATCH = MatchForSubstringResult("none")


def str_compare(a: Optional[str], b: Optional[str], ignore_case: bool = False) -> bool:
    if a is None or b is None:
        return a is b
    if ignore_case:
        return a.lower() == b.lower()
    return a == b


def match_for_substring(value: Optional[str], search_string: Optional[str], ignore_case: bool = False) -> MatchForSubstringResult:
    """Match ``search_string`` against ``value``.

    Exact equality wins over containment. Only the first occurrence of the
    pattern is highlighted.
    """
    if not value or not search_string:
        return _NO_MATCH

    if str_compare(value, search_string, ignore_case):
        return MatchForSubstringResult("equal", ((0, len(value)),))

    if ignore_case:
        if search_string.lower() not in value.lower():
            return _NO_MATCH
        # Spans index the original value; lower() may change its length.
        found = re.search(re.escape(search_string), value, re.IGNORECASE)
        highlights = (found.span(),) if found else None
        return MatchForSubstringResult("contains", highlights)

    start = value.find(search_string)
    if start == -1:
        return _NO_MATCH
    return MatchForSubstringResult("contains", ((start, start + len(search_string)),))


def is_category_like_tree_element(element: Any) -> bool:
    if element is None:
        return False
    return isinstance(element, TreeElement) and element.element_type in ("category", "model")


def get_element_full_path(element: Any) -> str:
    return element.paths.get_parent_path("/", True)


def create_tree_element_paths(parent_path: str, any_slash: bool = False) -> TreeElementPaths:
    """Build paths from ``a/b/c``; with ``any_slash`` backslashes count too."""
    if any_slash:
        parent_path = (parent_path or "").replace("\\", "/")
    return TreeElementPaths.from_path(parent_path, "/")


def is_subset_of_array(source_arr: Sequence[str], subset_arr: Sequence[str], ignore_case: bool = False) -> bool:
    """Return True if the overlapping prefix of both sequences is equal."""
    if len(subset_arr) == 0:
        return False
    max_length = min(len(source_arr), len(subset_arr))
    for i in range(max_length):
        if not str_compare(source_arr[i], subset_arr[i], ignore_case):
            return False
    return True


def _match_children(element: Any, pattern: str, ignore_case: bool) -> List[MatchingElement]:
    result: List[MatchingElement] = []
    for child in list(element.categories) + list(element.resources):
        match = match_for_substring(child.name, pattern, ignore_case)
        if match.match != "none":
            result.append(MatchingElement(child, match, True))
    return result


def find_childs_by_paths(
    root: Any,
    element_paths: Union[TreeElementPaths, Sequence[str]],
    ignore_case: bool = True,
) -> List[MatchingElement]:
    """Resolve all but the last segment, then match the last one as a pattern.

    Parameters
    ----------
    root
        Category-like element to start from (model root or a category).
    element_paths
        Path segments, either as :class:`TreeElementPaths` or a sequence.
    ignore_case
        Case-insensitive pattern matching for the final segment.

    Returns
    -------
    List[MatchingElement]
        Matching child categories (first) and resources of the resolved node,
        each with ``leaf=True``. Empty when the path is empty or cannot be
        walked.
    """
    if isinstance(element_paths, TreeElementPaths):
        paths = element_paths.get_paths(True)
    else:
        paths = [p for p in element_paths if p]
    if not paths:
        return []

    result: List[MatchingElement] = []
    current: Any = root
    last_idx = len(paths) - 1

    for idx, segment in enumerate(paths):
        if not is_category_like_tree_element(current):
            break
        if idx == last_idx:
            result.extend(_match_children(current, segment, ignore_case))
        else:
            current = current.get_category(segment)

    return result


def resolve(
    root: Any,
    path_or_pattern: Union[str, TreeElementPaths, Sequence[str]],
    any_slash: bool = True,
    ignore_case: bool = True,
) -> List[MatchingElement]:
    """Host-facing entry point accepting a ``/a/b/pattern`` string or segments."""
    if isinstance(path_or_pattern, str):
        element_paths: Union[TreeElementPaths, Sequence[str]] = create_tree_element_paths(path_or_pattern, any_slash)
    else:
        element_paths = path_or_pattern
    return find_childs_by_paths(root, element_paths, ignore_case)
