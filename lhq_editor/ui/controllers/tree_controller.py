from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from lhq_editor.config import ConfigManager
from lhq_editor.core.context import AppContext, SelectionFlags, compute_selection_flags, get_app_context
from lhq_editor.core.elements import VirtualRootElement, is_virtual_tree_element
from lhq_editor.core.models import RootModelElement
from lhq_editor.core.services.search_service import AdvancedFindService, FindResult
from lhq_editor.core.services.tree_editing_service import OperationResult, TreeEditingService
from lhq_editor.ui.tree_item import TreeItem, build_tree_item

__all__ = ["SelectionListener", "TreeController"]

logger = logging.getLogger(__name__)

SelectionListener = Callable[[List[Any], SelectionFlags], None]


class TreeController:
    """Controller coordinating the tree view with the editing and find services.

    This controller maintains transient view state (loaded model, virtual
    layer, selection) and delegates operations to the services. It contains
    no UI toolkit code; the host renders :class:`TreeItem` descriptors and
    forwards user actions.

    Parameters
    ----------
    editing_service : TreeEditingService, optional
        Service performing structural edits. A new one is created if omitted.
    find_service : AdvancedFindService, optional
        Service holding advanced-find state. If omitted, one is created using
        the ``search.ignore_case`` setting of :class:`ConfigManager`.
    app_context : AppContext, optional
        Context publishing selection flags. Falls back to the global context
        from :func:`get_app_context`.

    Notes
    -----
    Language edits replace the virtual language nodes; nodes obtained from
    :meth:`get_children` before such an edit must not be reused.
    """

    def __init__(
        self,
        editing_service: Optional[TreeEditingService] = None,
        find_service: Optional[AdvancedFindService] = None,
        app_context: Optional[AppContext] = None,
    ) -> None:
        self.editing_service: TreeEditingService = editing_service or TreeEditingService()
        self.find_service: AdvancedFindService = find_service or AdvancedFindService(
            ignore_case=ConfigManager().get_search_ignore_case()
        )
        self._app_context = app_context

        self.root: Optional[RootModelElement] = None
        self.virtual_root: Optional[VirtualRootElement] = None
        self.selected_elements: List[Any] = []
        self._languages_visible: bool = True
        self._listeners: List[SelectionListener] = []

    # ---------------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------------

    @property
    def app_context(self) -> Optional[AppContext]:
        return self._app_context if self._app_context is not None else get_app_context()

    @property
    def languages_visible(self) -> bool:
        ctx = self.app_context
        return ctx.languages_visible if ctx is not None else self._languages_visible

    def _refresh_virtual_root(self) -> None:
        if self.virtual_root is not None:
            self.virtual_root.refresh(self.languages_visible)

    def _after_language_edit(self, result: OperationResult) -> OperationResult:
        if result.success:
            self._refresh_virtual_root()
            # Selected language nodes were replaced.
            self.on_selection_changed([])
        return result

    # ---------------------------------------------------------------------------------
    # Model lifecycle
    # ---------------------------------------------------------------------------------

    def load_model(self, root: RootModelElement) -> None:
        """Show ``root`` in the tree, replacing any previous model."""
        self.root = root
        self.virtual_root = VirtualRootElement(root, self.languages_visible)
        self.find_service.reset()
        ctx = self.app_context
        if ctx is not None:
            ctx.is_editor_active = True
        self.on_selection_changed([])
        logger.info("Loaded model '%s' with %d language(s)", root.name, len(root.languages))

    def close(self) -> None:
        self.root = None
        self.virtual_root = None
        self.selected_elements = []
        self.find_service.reset()
        ctx = self.app_context
        if ctx is not None:
            ctx.clear_context_values()

    # ---------------------------------------------------------------------------------
    # Tree data
    # ---------------------------------------------------------------------------------

    def get_children(self, element: Any = None) -> List[Any]:
        """Return the children shown under ``element`` (top level when None)."""
        if self.root is None or self.virtual_root is None:
            return []

        if element is None or is_virtual_tree_element(element, "treeRoot"):
            return [self.virtual_root.languages_root, self.root]

        if is_virtual_tree_element(element, "languages"):
            return element.virtual_languages if self.languages_visible else []

        if is_virtual_tree_element(element) or element.element_type == "resource":
            return []

        return [*element.categories, *element.resources]

    def get_parent(self, element: Any) -> Any:
        if element is None:
            return None
        if is_virtual_tree_element(element, "language"):
            return self.virtual_root.languages_root if self.virtual_root is not None else None
        if is_virtual_tree_element(element):
            return None
        if element.element_type == "resource" and element.parent is None:
            return element.root
        return element.parent

    def get_tree_item(self, element: Any) -> TreeItem:
        return build_tree_item(element, self.find_service.options, self.languages_visible)

    # ---------------------------------------------------------------------------------
    # Selection
    # ---------------------------------------------------------------------------------

    def add_selection_listener(self, listener: SelectionListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def on_selection_changed(self, elements: Sequence[Any]) -> SelectionFlags:
        self.selected_elements = list(elements)
        ctx = self.app_context
        if ctx is not None:
            flags = ctx.set_tree_view_has_selected_item(self.selected_elements)
        else:
            flags = compute_selection_flags(self.selected_elements)

        for listener in list(self._listeners):
            try:
                listener(list(self.selected_elements), flags)
            except Exception as exc:
                logger.warning("Selection listener failed: %s", exc, exc_info=True)
        return flags

    # ---------------------------------------------------------------------------------
    # Find & view options
    # ---------------------------------------------------------------------------------

    def advanced_find(self, search_text: str) -> FindResult:
        """Run or continue an advanced find; select the focused element."""
        result = self.find_service.find(self.root, self.virtual_root, search_text)
        if result.element is not None:
            self.on_selection_changed([result.element])
        return result

    def toggle_languages(self, visible: Optional[bool] = None) -> bool:
        """Show or hide the language nodes; toggles when ``visible`` is None."""
        new_value = (not self.languages_visible) if visible is None else bool(visible)
        ctx = self.app_context
        if ctx is not None:
            ctx.languages_visible = new_value
        self._languages_visible = new_value
        self._refresh_virtual_root()
        if any(
            is_virtual_tree_element(x, "language") or is_virtual_tree_element(x, "languages")
            for x in self.selected_elements
        ):
            # Selected language nodes were replaced.
            self.on_selection_changed([])
        return new_value

    # ---------------------------------------------------------------------------------
    # Edits
    # ---------------------------------------------------------------------------------

    def add_element(self, parent: Any, element_type: str, name: str) -> OperationResult:
        target = self.root if is_virtual_tree_element(parent, "treeRoot") else parent
        return self.editing_service.add_element(target, element_type, name)

    def rename_element(self, element: Any, new_name: str) -> OperationResult:
        return self.editing_service.rename_element(element, new_name)

    def delete_elements(self, elements: Optional[Sequence[Any]] = None) -> OperationResult:
        """Delete ``elements``, defaulting to the current selection."""
        result = self.editing_service.delete_elements(self.selected_elements if elements is None else elements)
        if result.success:
            self.on_selection_changed([])
        return result

    def move_elements(self, elements: Sequence[Any], target: Any) -> OperationResult:
        return self.editing_service.move_elements(elements, target)

    def add_languages(self, names: Sequence[str]) -> OperationResult:
        if self.root is None:
            return OperationResult(False, "No model loaded.")
        return self._after_language_edit(self.editing_service.add_languages(self.root, names))

    def delete_languages(self, language_elements: Optional[Sequence[Any]] = None) -> OperationResult:
        if self.root is None:
            return OperationResult(False, "No model loaded.")
        elements = self.selected_elements if language_elements is None else language_elements
        return self._after_language_edit(self.editing_service.delete_languages(self.root, elements))

    def mark_language_as_primary(self, language_elements: Optional[Sequence[Any]] = None) -> OperationResult:
        if self.root is None:
            return OperationResult(False, "No model loaded.")
        elements = self.selected_elements if language_elements is None else language_elements
        return self._after_language_edit(self.editing_service.mark_language_as_primary(self.root, elements))
