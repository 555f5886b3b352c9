from __future__ import annotations

"""Virtual (non-persisted) tree elements.

The tree view shows a few nodes that do not exist in the resource model: a
synthetic root wrapping the model, a "Languages" group and one node per
language. These classes expose the same surface as real tree elements
(name, element type, parent, paths, level) so the view can treat both kinds
uniformly, but they are never written back to the model.

Virtual nodes report no parent. They are attached to the view by the tree
controller, not nested under the real root, so callers mixing real and
virtual elements must special-case depth.
"""

from typing import Any, Dict, Iterable, List, Literal, Optional

from .models import CategoryLikeTreeElement, RootModelElement, TreeElement, TreeElementPaths

__all__ = [
    "VirtualElementType",
    "VirtualTreeElement",
    "VirtualRootElement",
    "LanguagesElement",
    "LanguageElement",
    "is_virtual_tree_element",
    "filter_tree_elements",
    "filter_virtual_tree_elements",
    "languages_label",
]

VirtualElementType = Literal["treeRoot", "languages", "language"]


class VirtualTreeElement:
    """Base class of every synthetic tree node.

    The ``virtual_element_type`` discriminator identifies the variant; type
    tests in this module compare it by value.
    """

    def __init__(self, root: RootModelElement, name: str, virtual_element_type: VirtualElementType) -> None:
        self._root = root
        self._name = name
        self._virtual_element_type: VirtualElementType = virtual_element_type
        self._paths = TreeElementPaths.from_path("/")
        self._id = f"/{virtual_element_type}/{name}"

    @property
    def id(self) -> str:
        return self._id

    @property
    def virtual_element_type(self) -> VirtualElementType:
        return self._virtual_element_type

    @property
    def element_type(self) -> str:
        return self._virtual_element_type

    @property
    def parent(self) -> Optional[CategoryLikeTreeElement]:
        return None

    @property
    def root(self) -> RootModelElement:
        return self._root

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    @property
    def description(self) -> str:
        return ""

    @property
    def paths(self) -> TreeElementPaths:
        return self._paths

    @property
    def is_root(self) -> bool:
        return False

    @property
    def data(self) -> Dict[str, Any]:
        return {}

    def change_parent(self, new_parent: Optional[CategoryLikeTreeElement]) -> bool:
        # View-only projection, nothing to re-parent.
        return True

    def get_level(self) -> int:
        level = 0
        current = self.parent
        while current is not None:
            level += 1
            current = current.parent
        return level

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._id!r}>"


class LanguageElement(VirtualTreeElement):
    """One language of the model."""

    def __init__(self, root: RootModelElement, name: str) -> None:
        super().__init__(root, name, "language")

    @property
    def is_primary(self) -> bool:
        # Primary can change without this node being rebuilt.
        return self.name == self.root.primary_language


class LanguagesElement(VirtualTreeElement):
    """Group node listing the model languages, primary first."""

    def __init__(self, root: RootModelElement, name: str) -> None:
        super().__init__(root, name, "languages")
        self._virtual_langs: List[LanguageElement] = []
        self.refresh()

    def refresh(self) -> None:
        """Rebuild the language nodes from the current model languages."""
        langs: List[LanguageElement] = []
        primary = self.root.primary_language
        languages = self.root.languages
        if primary and primary in languages:
            langs.append(LanguageElement(self.root, primary))
        for lang in languages:
            if lang != primary:
                langs.append(LanguageElement(self.root, lang))
        self._virtual_langs = langs

    @property
    def virtual_languages(self) -> List[LanguageElement]:
        return list(self._virtual_langs)

    def find(self, lang_name: str) -> Optional[LanguageElement]:
        for lang in self._virtual_langs:
            if lang.name == lang_name:
                return lang
        return None

    def contains(self, lang_name: str) -> bool:
        return self.find(lang_name) is not None


def languages_label(root: RootModelElement, languages_visible: bool) -> str:
    """Return the caption of the languages group.

    When the individual languages are hidden the caption summarises them.
    """
    label = "Languages"
    if not languages_visible:
        primary = root.primary_language or ""
        label += f": {len(root.languages)} (primary: {primary})"
    return label


class VirtualRootElement(VirtualTreeElement):
    """Synthetic root wrapping a model root, owns the languages group."""

    def __init__(self, root: RootModelElement, languages_visible: bool = True) -> None:
        super().__init__(root, root.name, "treeRoot")
        self._languages_root = LanguagesElement(root, languages_label(root, languages_visible))

    @property
    def languages_root(self) -> LanguagesElement:
        return self._languages_root

    @property
    def is_root(self) -> bool:
        return True

    def refresh(self, languages_visible: bool = True) -> LanguagesElement:
        """Replace the languages group after the model language set changed.

        Language nodes obtained before the call must not be used afterwards.
        """
        self._languages_root = LanguagesElement(self.root, languages_label(self.root, languages_visible))
        return self._languages_root


def is_virtual_tree_element(element: Any, virtual_element_type: Optional[VirtualElementType] = None) -> bool:
    """Return True if ``element`` is a virtual node (of the given type, if any)."""
    if element is None or isinstance(element, TreeElement):
        return False
    element_vtype = getattr(element, "virtual_element_type", None)
    if element_vtype is None:
        return False
    return virtual_element_type is None or element_vtype == virtual_element_type


def filter_tree_elements(elements: Iterable[Any]) -> List[TreeElement]:
    """Keep only real (persisted) tree elements."""
    return [x for x in elements if isinstance(x, TreeElement)]


def filter_virtual_tree_elements(
    elements: Iterable[Any],
    virtual_element_type: Optional[VirtualElementType] = None,
) -> List[Any]:
    return [x for x in elements if is_virtual_tree_element(x, virtual_element_type)]
