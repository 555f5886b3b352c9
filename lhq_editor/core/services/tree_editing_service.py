from __future__ import annotations

"""Service layer for structural edits on the in-memory resource tree.

This module provides a UI-agnostic, testable service for the edits the tree
view offers: adding, renaming, deleting and moving categories/resources, and
adding, deleting or promoting languages.

Scope and guarantees:
- Operates purely in-memory on the tree model, no file I/O nor UI imports.
- Names are checked with the element name validator before any mutation.
- Invalid operations return OperationResult(success=False, ...) with a
  message suitable for the host to display; they never raise.

Examples
--------
Basic usage:

    service = TreeEditingService()
    result = service.add_element(root, "category", "Messages")
    if not result.success:
        print(result.message)

"""

from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional, Sequence

from lhq_editor.core.elements import filter_tree_elements, filter_virtual_tree_elements, is_virtual_tree_element
from lhq_editor.core.models import CategoryLikeTreeElement, RootModelElement, TreeElement
from lhq_editor.core.search import get_element_full_path, is_category_like_tree_element
from lhq_editor.core.validator import validate_tree_element_name

__all__ = ["OperationResult", "TreeEditingService"]

logger = logging.getLogger(__name__)

_MAX_DISPLAY_LANGUAGES = 10


@dataclass(frozen=True)
class OperationResult:
    """Result of a tree editing operation.

    Attributes
    ----------
    success
        Whether the operation completed successfully.
    message
        Human-readable summary suitable for logs or UI display.
    details
        Optional structured details for diagnostics or caller logic.
    """
    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None


class TreeEditingService:
    """Encapsulates edit operations on a resource tree.

    Design principles:
    - No UI dependencies, no disk I/O; persisting the model is the caller's job.
    - No exceptions for expected invalid actions; return OperationResult.
    - Virtual elements passed in are ignored by element edits and used only
      by language edits.
    """

    # -------------------------------------------------------------------------
    # Elements
    # -------------------------------------------------------------------------

    def add_element(self, parent: Any, element_type: str, name: str) -> OperationResult:
        """Add a category or resource under ``parent``.

        A resource given as parent is replaced by its own category-like
        parent, so "add" on a selected resource adds a sibling.
        """
        logger.info("Edit: add_element type=%s name=%s", element_type, name)
        if element_type not in ("category", "resource"):
            return OperationResult(False, f"Unsupported element type '{element_type}'.", {"element_type": element_type})

        target = self.get_category_like_parent(parent) if _is_resource(parent) else parent
        if not is_category_like_tree_element(target):
            logger.warning("Edit FAIL: add_element invalid_parent")
            return OperationResult(False, "Elements can only be added under the root or a category.")

        error = validate_tree_element_name(element_type, name, target)
        if error:
            logger.warning("Edit FAIL: add_element validation name=%s error=%s", name, error)
            return OperationResult(False, error, {"name": name})

        if element_type == "resource":
            element = target.add_resource(name)
        else:
            element = target.add_category(name)

        parent_path = get_element_full_path(target)
        logger.info("Edit OK: add_element %s", get_element_full_path(element))
        return OperationResult(
            True,
            f"Added new {element_type} '{name}' under '{parent_path}'",
            {"element": element, "parent_path": parent_path},
        )

    def rename_element(self, element: Any, new_name: str) -> OperationResult:
        if element is None or is_virtual_tree_element(element) or not isinstance(element, TreeElement):
            return OperationResult(False, "Only categories and resources can be renamed.")
        if element.is_root:
            return OperationResult(False, "Root element cannot be renamed here.")

        original_name = element.name
        elem_path = get_element_full_path(element)
        logger.info("Edit: rename_element path=%s new_name=%s", elem_path, new_name)
        if not new_name or new_name == original_name:
            return OperationResult(False, "Name not changed.", {"path": elem_path})

        parent = self.get_category_like_parent(element)
        error = validate_tree_element_name(element.element_type, new_name, parent, elem_path)
        if error:
            logger.warning("Edit FAIL: rename_element validation path=%s error=%s", elem_path, error)
            return OperationResult(False, error, {"path": elem_path})

        element.name = new_name
        logger.info("Edit OK: rename_element %s -> %s", elem_path, new_name)
        return OperationResult(
            True,
            f"Renamed {element.element_type} '{original_name}' to '{new_name}'.",
            {"element": element, "old_path": elem_path, "new_path": get_element_full_path(element)},
        )

    def delete_elements(self, elements: Sequence[Any]) -> OperationResult:
        elems = filter_tree_elements(elements)
        count = len(elems)
        logger.info("Edit: delete_elements count=%d", count)
        if count == 0:
            return OperationResult(False, "No elements to delete.")

        first = elems[0]
        if any(x.is_root for x in elems):
            return OperationResult(False, f"Cannot delete root element '{get_element_full_path(first)}'.")

        elem_ident = (
            f"{first.element_type} '{get_element_full_path(first)}'" if count == 1 else f"{count} selected elements"
        )
        if count > 1 and not _same_parent(elems):
            logger.warning("Edit FAIL: delete_elements different_parents")
            return OperationResult(False, f"Cannot delete {elem_ident} with different parents.")

        deleted: List[str] = []
        for elem in elems:
            path = get_element_full_path(elem)
            parent = self.get_category_like_parent(elem)
            if parent is not None and parent.remove_element(elem):
                deleted.append(path)
                logger.debug("Deleted %s '%s'", elem.element_type, path)
            else:
                logger.warning("Cannot delete %s '%s' - no parent found.", elem.element_type, path)

        ok = len(deleted) == count
        logger.info("Edit %s: delete_elements deleted=%d", "OK" if ok else "FAIL", len(deleted))
        return OperationResult(
            ok,
            f"Successfully deleted {elem_ident}." if ok else f"Failed to delete {elem_ident}.",
            {"deleted": deleted},
        )

    def move_elements(self, elements: Sequence[Any], target: Any) -> OperationResult:
        """Move elements sharing one parent under ``target``.

        Sources already present by name under the target are skipped.
        """
        if not is_category_like_tree_element(target):
            return OperationResult(False, "Elements can only be moved under the root or a category.")

        sources = [x for x in filter_tree_elements(elements) if not x.is_root]
        count = len(sources)
        if count == 0:
            return OperationResult(False, "No elements to move.")

        elem_text = f"{count} element(s)"
        target_path = get_element_full_path(target)
        logger.info("Edit: move_elements count=%d target=%s", count, target_path)

        if count > 1 and not _same_parent(sources):
            return OperationResult(False, f"Cannot move {elem_text} with different parents.")
        if target is sources[0].parent:
            return OperationResult(False, f"Cannot move {elem_text} to the same parent element '{target_path}'.")

        moved: List[Any] = []
        skipped: List[str] = []
        for item in sources:
            old_path = get_element_full_path(item)
            if target.contains(item.name, item.element_type):
                skipped.append(old_path)
                continue
            if item.change_parent(target):
                moved.append(item)
                logger.debug("Moved %s '%s' to '%s'", item.element_type, old_path, get_element_full_path(item))
            else:
                skipped.append(old_path)

        if not moved:
            return OperationResult(False, f"No elements moved under '{target_path}'.", {"moved": [], "skipped": skipped})

        what = (
            f"{moved[0].element_type} '{get_element_full_path(moved[0])}'" if len(moved) == 1
            else f"{len(moved)} element(s)"
        )
        logger.info("Edit OK: move_elements moved=%d skipped=%d", len(moved), len(skipped))
        return OperationResult(True, f"Moved {what} under '{target_path}'", {"moved": moved, "skipped": skipped})

    # -------------------------------------------------------------------------
    # Languages
    # -------------------------------------------------------------------------

    def add_languages(self, root: RootModelElement, names: Sequence[str]) -> OperationResult:
        added = [name for name in names if root.add_language(name)]
        logger.info("Edit: add_languages requested=%d added=%d", len(names), len(added))
        if not added:
            return OperationResult(False, "No languages were added as they already exist in the model.", {"added": []})

        if len(added) == 1:
            added_str = f"language: {added[0]}"
        elif len(added) <= 5:
            added_str = f"{len(added)} languages: " + ", ".join(added)
        else:
            added_str = f"{len(added)} languages"
        return OperationResult(True, f"Successfully added {added_str}.", {"added": added})

    def delete_languages(self, root: RootModelElement, language_elements: Sequence[Any]) -> OperationResult:
        """Delete languages given as virtual language nodes.

        The primary language and the last remaining language are protected.
        """
        langs = filter_virtual_tree_elements(language_elements, "language")
        count = len(langs)
        if count == 0:
            return OperationResult(False, "No languages selected.")

        if len(root.languages) - count <= 0:
            return OperationResult(False, "Cannot delete all languages. At least one language must remain.")

        primary = next((x for x in langs if x.is_primary), None)
        if primary is not None:
            msg = (
                f"Primary language '{primary.name}' cannot be deleted." if count == 1
                else f"Selected languages contain primary language '{primary.name}' which cannot be deleted."
            )
            logger.warning("Edit FAIL: delete_languages primary=%s", primary.name)
            return OperationResult(False, msg)

        if count == 1:
            elem_ident = langs[0].name
        elif count <= _MAX_DISPLAY_LANGUAGES:
            elem_ident = ", ".join(f"'{x.name}'" for x in langs)
        else:
            elem_ident = f"{count} languages"

        removed: List[str] = []
        for lang in langs:
            if root.remove_language(lang.name):
                removed.append(lang.name)
            else:
                logger.warning("Cannot delete language '%s' - not found in model.", lang.name)

        logger.info("Edit OK: delete_languages removed=%d", len(removed))
        return OperationResult(bool(removed), f"Successfully deleted {elem_ident}.", {"removed": removed})

    def mark_language_as_primary(self, root: RootModelElement, language_elements: Sequence[Any]) -> OperationResult:
        langs = filter_virtual_tree_elements(language_elements, "language")
        if not langs:
            return OperationResult(False, "No language selected.")
        if len(langs) > 1:
            return OperationResult(False, "Cannot mark multiple languages as primary. Please select only one language.")

        name = langs[0].name
        if root.primary_language == name:
            return OperationResult(False, f"Language '{name}' is already marked as primary.", {"language": name})
        if not root.has_language(name):
            return OperationResult(False, f"Language '{name}' is not part of the model.", {"language": name})

        previous = root.primary_language
        root.primary_language = name
        logger.info("Edit OK: mark_language_as_primary %s (was %s)", name, previous)
        return OperationResult(
            True,
            f"Successfully marked '{name}' as primary language.",
            {"language": name, "previous": previous},
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def get_category_like_parent(element: Any) -> Optional[CategoryLikeTreeElement]:
        """Return the category-like parent, falling back to the root for resources."""
        if element is None:
            return None
        if _is_resource(element):
            return element.parent or element.root
        return element.parent


def _is_resource(element: Any) -> bool:
    return isinstance(element, TreeElement) and element.element_type == "resource"


def _same_parent(elements: Sequence[Any]) -> bool:
    first_parent = elements[0].parent
    return all(x.parent is first_parent for x in elements)
