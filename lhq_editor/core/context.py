from __future__ import annotations

"""Selection-driven UI context for the LHQ tree view.

The host UI enables or disables commands (rename, delete, language actions,
...) through named boolean context keys. :func:`compute_selection_flags`
derives those booleans from the current selection and has no side effects;
:class:`AppContext` publishes them through a host-supplied callable and keeps
the few pieces of process-wide editor state (languages visibility, active
editor flag).
"""

from dataclasses import asdict, dataclass
import logging
from typing import Any, Callable, Dict, MutableMapping, Optional, Sequence

from .elements import is_virtual_tree_element

__all__ = [
    "SelectionFlags",
    "ContextPublisher",
    "DEFAULT_CONTEXT_KEYS",
    "compute_selection_flags",
    "AppContext",
    "get_app_context",
    "set_app_context",
]

logger = logging.getLogger(__name__)

ContextPublisher = Callable[[str, Any], None]

DEFAULT_CONTEXT_KEYS: Dict[str, str] = {
    "is_editor_active": "lhqEditorIsActive",
    "has_selected_item": "lhqTreeHasSelectedItem",
    "has_multi_selection": "lhqTreeHasMultiSelection",
    "has_selected_diff_parents": "lhqTreeHasSelectedDiffParents",
    "has_selected_resource": "lhqTreeHasSelectedResource",
    "has_selected_model_root": "lhqTreeHasSelectedModelRoot",
    "has_language_selection": "lhqTreeHasLanguageSelection",
    "has_primary_language_selected": "lhqTreeHasPrimaryLanguageSelected",
    "has_languages_visible": "lhqTreeHasLanguagesVisible",
}

_LANGUAGES_VISIBLE_STATE_KEY = "languagesVisible"


@dataclass(frozen=True)
class SelectionFlags:
    """Booleans describing the shape of the current tree selection."""

    has_selected_item: bool = False
    has_multi_selection: bool = False
    has_selected_diff_parents: bool = False
    has_selected_resource: bool = False
    has_selected_model_root: bool = False
    has_language_selection: bool = False
    has_primary_language_selected: bool = False

    def as_dict(self) -> Dict[str, bool]:
        return asdict(self)


def compute_selection_flags(selected_elements: Sequence[Any]) -> SelectionFlags:
    """Derive :class:`SelectionFlags` from an ordered selection.

    Elements may be real or virtual. Parent comparison is by identity;
    virtual nodes have no parent, so mixing one with a real element always
    counts as different parents.
    """
    count = len(selected_elements)
    has_selected_item = count == 1
    has_multi_selection = count > 1

    has_selected_diff_parents = False
    if has_multi_selection:
        first_parent = selected_elements[0].parent
        has_selected_diff_parents = any(x.parent is not first_parent for x in selected_elements)

    single_type = selected_elements[0].element_type if has_selected_item else None

    has_language_selection = any(
        is_virtual_tree_element(x, "language") or is_virtual_tree_element(x, "languages")
        for x in selected_elements
    )
    has_primary_language_selected = any(
        is_virtual_tree_element(x, "language") and x.is_primary for x in selected_elements
    )

    return SelectionFlags(
        has_selected_item=has_selected_item,
        has_multi_selection=has_multi_selection,
        has_selected_diff_parents=has_selected_diff_parents,
        has_selected_resource=single_type == "resource",
        has_selected_model_root=single_type == "model",
        has_language_selection=has_language_selection,
        has_primary_language_selected=has_primary_language_selected,
    )


class AppContext:
    """Publishes editor state to the host as named context values.

    Parameters
    ----------
    set_context
        Host callable ``(key, value)``; None keeps values local only.
    global_state
        Mapping persisted by the host across sessions (languages visibility).
    languages_visible_default
        Used when ``global_state`` has no stored visibility yet.
    context_keys
        Overrides of :data:`DEFAULT_CONTEXT_KEYS`.
    """

    def __init__(
        self,
        set_context: Optional[ContextPublisher] = None,
        global_state: Optional[MutableMapping[str, Any]] = None,
        languages_visible_default: bool = True,
        context_keys: Optional[Dict[str, str]] = None,
    ) -> None:
        self._set_context = set_context
        self._global_state: MutableMapping[str, Any] = global_state if global_state is not None else {}
        self._languages_visible_default = languages_visible_default
        self._context_keys: Dict[str, str] = dict(DEFAULT_CONTEXT_KEYS)
        if context_keys:
            self._context_keys.update(context_keys)
        self._is_editor_active = False
        self._selection_flags = SelectionFlags()
        self._values: Dict[str, Any] = {}

    @classmethod
    def from_config(
        cls,
        set_context: Optional[ContextPublisher] = None,
        global_state: Optional[MutableMapping[str, Any]] = None,
    ) -> "AppContext":
        """Build a context with defaults taken from :class:`ConfigManager`."""
        from lhq_editor.config import ConfigManager

        cfg = ConfigManager()
        return cls(
            set_context=set_context,
            global_state=global_state,
            languages_visible_default=cfg.get_languages_visible(),
            context_keys=cfg.get_context_keys(),
        )

    def init(self) -> None:
        """Publish initial values for every context key."""
        self.languages_visible = self.languages_visible
        self._is_editor_active = False
        self._publish("is_editor_active", False)
        self.set_tree_view_has_selected_item([])

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def context_keys(self) -> Dict[str, str]:
        return dict(self._context_keys)

    @property
    def values(self) -> Dict[str, Any]:
        """Last published value per context key name."""
        return dict(self._values)

    @property
    def selection_flags(self) -> SelectionFlags:
        return self._selection_flags

    @property
    def languages_visible(self) -> bool:
        return bool(self._global_state.get(_LANGUAGES_VISIBLE_STATE_KEY, self._languages_visible_default))

    @languages_visible.setter
    def languages_visible(self, visible: bool) -> None:
        self._global_state[_LANGUAGES_VISIBLE_STATE_KEY] = bool(visible)
        self._publish("has_languages_visible", bool(visible))

    @property
    def is_editor_active(self) -> bool:
        return self._is_editor_active

    @is_editor_active.setter
    def is_editor_active(self, active: bool) -> None:
        if self._is_editor_active != active:
            self._is_editor_active = active
            self._publish("is_editor_active", active)

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def set_tree_view_has_selected_item(self, selected_elements: Sequence[Any]) -> SelectionFlags:
        """Recompute selection flags and publish each one as a context key."""
        flags = compute_selection_flags(selected_elements)
        self._selection_flags = flags
        for name, value in flags.as_dict().items():
            self._publish(name, value)
        logger.debug("Selection flags updated for %d element(s): %s", len(selected_elements), flags)
        return flags

    def clear_context_values(self) -> None:
        """Reset selection and editor flags, e.g. when the document closes."""
        self.is_editor_active = False
        self.set_tree_view_has_selected_item([])

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _publish(self, flag_name: str, value: Any) -> None:
        key = self._context_keys.get(flag_name, flag_name)
        self._values[key] = value
        if self._set_context is None:
            return
        try:
            self._set_context(key, value)
        except Exception as exc:
            logger.warning("Failed to publish context key '%s': %s", key, exc, exc_info=True)


# -------------------------------------------------------------------------
# Global Context Accessor
# -------------------------------------------------------------------------

_global_app_context: Optional[AppContext] = None


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or with None, reset) the process-wide application context."""
    global _global_app_context
    _global_app_context = context
    if context is not None:
        logger.info("Global AppContext set")


def get_app_context() -> Optional[AppContext]:
    return _global_app_context
