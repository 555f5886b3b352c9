from __future__ import annotations

"""Advanced find over the resource tree.

The search text prefix selects the search kind:

- ``/`` or ``\\``: path search, e.g. ``/Messages/Err`` lists children of
  category ``Messages`` whose name contains ``Err``; a bare ``/`` focuses
  the model root.
- ``@``: language, focuses the matching language node.
- ``!``: translation, resources with any translation containing the text.
- ``#`` or no prefix: name search across the whole tree.

Submitting the same text again advances to the next match and wraps around.
The service only keeps state; revealing the focused element is up to the UI.
"""

from dataclasses import dataclass, field
import logging
import uuid
from typing import Any, List, Literal, Optional

from lhq_editor.core.search import (
    MatchForSubstringResult,
    MatchingElement,
    create_tree_element_paths,
    find_childs_by_paths,
    match_for_substring,
)

__all__ = ["SearchTreeKind", "SearchTreeOptions", "FindResult", "AdvancedFindService"]

logger = logging.getLogger(__name__)

SearchTreeKind = Literal["path", "name", "translation", "language"]


def _new_uid() -> str:
    return str(uuid.uuid4())


@dataclass
class SearchTreeOptions:
    """Transient state of the current advanced search."""

    type: SearchTreeKind = "name"
    search_text: str = ""
    filter: str = ""
    uid: str = field(default_factory=_new_uid)
    elems: List[MatchingElement] = field(default_factory=list)
    elem_idx: int = -1
    paths: List[str] = field(default_factory=list)

    def find_match(self, element: Any) -> Optional[MatchingElement]:
        for elem in self.elems:
            if elem.element is element:
                return elem
        return None


@dataclass(frozen=True)
class FindResult:
    """Outcome of one :meth:`AdvancedFindService.find` call.

    Attributes
    ----------
    element
        Element the UI should reveal and select, or None.
    same_search
        True when the text equals the previous search (match advanced).
    total
        Number of matches for the current search.
    """
    element: Any
    same_search: bool
    total: int


class AdvancedFindService:
    """Keeps advanced-find state and computes the element to focus."""

    def __init__(self, ignore_case: bool = True) -> None:
        self.ignore_case = ignore_case
        self.options = SearchTreeOptions()

    def reset(self) -> None:
        self.options = SearchTreeOptions()

    def find(self, root: Any, virtual_root: Any, search_text: Optional[str]) -> FindResult:
        """Run (or continue) a search and return the element to focus.

        Parameters
        ----------
        root
            Model root to search.
        virtual_root
            Virtual root whose languages group serves language searches.
        search_text
            Raw text entered by the user; surrounding whitespace is ignored.
        """
        text = (search_text or "").strip()
        same_search = text == self.options.search_text
        uid = self.options.uid if same_search else _new_uid()

        if root is None:
            return FindResult(None, same_search, 0)

        if text.startswith("/") or text.startswith("\\"):
            if not (same_search and self.options.type == "path"):
                path_filter = text[1:]
                element_paths = create_tree_element_paths(path_filter or "/", True)
                self.options = SearchTreeOptions(
                    type="path",
                    search_text=text,
                    filter=path_filter,
                    uid=uid,
                    elems=find_childs_by_paths(root, element_paths, self.ignore_case),
                    paths=element_paths.get_paths(True),
                )
        elif text.startswith("@"):
            self.options = SearchTreeOptions(type="language", search_text=text, filter=text[1:], uid=uid)
        elif text.startswith("!"):
            if not (same_search and self.options.type == "translation"):
                value_filter = text[1:]
                self.options = SearchTreeOptions(
                    type="translation",
                    search_text=text,
                    filter=value_filter,
                    uid=uid,
                    elems=self._find_by_translation(root, value_filter),
                )
        elif not (same_search and self.options.type == "name"):
            name_filter = text[1:] if text.startswith("#") else text
            self.options = SearchTreeOptions(
                type="name",
                search_text=text,
                filter=name_filter,
                uid=uid,
                elems=self._find_by_name(root, name_filter),
            )

        element = self._element_to_focus(root, virtual_root, same_search)
        logger.debug(
            "Find '%s' type=%s matches=%d idx=%d", text, self.options.type, len(self.options.elems), self.options.elem_idx
        )
        return FindResult(element, same_search, len(self.options.elems))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _element_to_focus(self, root: Any, virtual_root: Any, same_search: bool) -> Any:
        opts = self.options
        if opts.type == "language":
            if virtual_root is None or not opts.filter:
                return None
            return virtual_root.languages_root.find(opts.filter)

        if opts.type == "path" and opts.search_text in ("/", "\\"):
            opts.elem_idx = -1
            return root

        if not opts.elems:
            return None

        elem_idx = 0
        if same_search:
            elem_idx = opts.elem_idx + 1
            if elem_idx >= len(opts.elems):
                elem_idx = 0
        opts.elem_idx = elem_idx
        return opts.elems[elem_idx].element

    def _find_by_name(self, root: Any, name_filter: str) -> List[MatchingElement]:
        elems: List[MatchingElement] = []
        for element, leaf in root.iter_tree():
            match = match_for_substring(element.name, name_filter, self.ignore_case)
            if match.match != "none":
                elems.append(MatchingElement(element, match, leaf))
        return elems

    def _find_by_translation(self, root: Any, value_filter: str) -> List[MatchingElement]:
        elems: List[MatchingElement] = []
        if not value_filter:
            return elems
        for element, leaf in root.iter_tree():
            if element.element_type != "resource":
                continue
            for lang in root.languages:
                value = element.get_value(lang)
                if match_for_substring(value, value_filter, self.ignore_case).match != "none":
                    # Hit is in a translation, the label gets no highlight.
                    elems.append(MatchingElement(element, MatchForSubstringResult("contains"), leaf))
                    break
        return elems
