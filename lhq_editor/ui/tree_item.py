from __future__ import annotations

"""Toolkit-neutral description of how one element is rendered in the tree."""

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from lhq_editor.core.elements import is_virtual_tree_element
from lhq_editor.core.search import get_element_full_path
from lhq_editor.core.services.search_service import SearchTreeOptions

__all__ = ["Collapsible", "TreeItem", "ICONS", "PRIMARY_LANGUAGE_ICON", "build_tree_item"]

Collapsible = Literal["none", "collapsed", "expanded"]

ICONS: Dict[str, str] = {
    "model": "symbol-method",
    "category": "symbol-folder",
    "resource": "debug-breakpoint-unverified",
    "treeRoot": "target",
    "languages": "globe",
    "language": "debug-breakpoint-log-unverified",
}

PRIMARY_LANGUAGE_ICON = "debug-breakpoint-log"


@dataclass(frozen=True)
class TreeItem:
    element: Any
    label: str
    highlights: Optional[Tuple[Tuple[int, int], ...]]
    collapsible: Collapsible
    context_value: str
    icon: str
    tooltip: str
    parent_path: str


def _highlights_for(element: Any, search: Optional[SearchTreeOptions]) -> Optional[Tuple[Tuple[int, int], ...]]:
    if search is None or not search.elems:
        return None
    found = search.find_match(element)
    if found is None or found.match.match == "none":
        return None
    # Path searches only highlight the terminal matches.
    if search.type == "path" and not found.leaf:
        return None
    return found.match.highlights


def build_tree_item(element: Any, search: Optional[SearchTreeOptions] = None, languages_visible: bool = True) -> TreeItem:
    element_type = element.element_type
    name = element.name

    if element_type in ("resource", "language"):
        collapsible: Collapsible = "none"
    elif element_type == "category":
        collapsible = "collapsed" if (element.has_categories or element.has_resources) else "none"
    else:
        collapsible = "expanded"

    if is_virtual_tree_element(element, "languages") and not languages_visible:
        collapsible = "none"

    icon = ICONS.get(element_type, "")
    if is_virtual_tree_element(element):
        parent_path = ""
        if element.virtual_element_type == "languages":
            tooltip = "**Languages**"
        elif element.virtual_element_type == "language":
            tooltip = f"**{'Primary Language' if element.is_primary else 'Language'}**: {name}"
            if element.is_primary:
                icon = PRIMARY_LANGUAGE_ICON
        else:
            tooltip = f"**Root**: {name}"
    else:
        type_str = "Root" if element_type == "model" else element_type.capitalize()
        parent_path = get_element_full_path(element)
        tooltip = f"**{type_str}**: {name} `{parent_path}`"

    return TreeItem(
        element=element,
        label=name,
        highlights=_highlights_for(element, search),
        collapsible=collapsible,
        context_value=element_type,
        icon=icon,
        tooltip=tooltip,
        parent_path=parent_path,
    )
