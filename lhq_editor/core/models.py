from __future__ import annotations

"""In-memory tree element model for LHQ resource files.

The model mirrors the shape of a parsed ``.lhq`` document: a single root
(element type ``model``) holding ordered categories and resources, where each
category may nest further categories and resources. The root also carries the
ordered list of languages and the primary language.

This module is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, GUI, etc.).
Serialization of the model is handled elsewhere.
"""

from typing import Any, Callable, Dict, Iterator, List, Literal, Optional, Sequence, Tuple

__all__ = [
    "TreeElementType",
    "CategoryOrResourceType",
    "TreeElementPaths",
    "TreeElement",
    "CategoryLikeTreeElement",
    "CategoryElement",
    "ResourceElement",
    "RootModelElement",
]

TreeElementType = Literal["model", "category", "resource"]
CategoryOrResourceType = Literal["category", "resource"]


class TreeElementPaths:
    """Slash-delimited address of an element relative to the model root.

    The root itself has no segments; a resource ``Res`` under category
    ``Cat`` has segments ``["Cat", "Res"]``.
    """

    def __init__(self, segments: Sequence[str]) -> None:
        self._segments: Tuple[str, ...] = tuple(s for s in segments if s)

    @classmethod
    def from_path(cls, path: str, separator: str = "/") -> "TreeElementPaths":
        return cls((path or "").split(separator))

    def get_paths(self, include_self: bool = True) -> List[str]:
        """Return the path segments, optionally without the last one."""
        if include_self:
            return list(self._segments)
        return list(self._segments[:-1])

    def get_parent_path(self, separator: str = "/", include_self: bool = False) -> str:
        return separator + separator.join(self.get_paths(include_self))

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeElementPaths):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __repr__(self) -> str:
        return f"TreeElementPaths({self.get_parent_path('/', True)!r})"


class TreeElement:
    """Base class for every persisted element of the resource tree.

    Attributes
    ----------
    name
        Element name, unique among siblings of the same element type.
    description
        Optional free-form description.
    data
        Transient per-element data which is never persisted.
    """

    def __init__(
        self,
        root: Optional["RootModelElement"],
        parent: Optional["CategoryLikeTreeElement"],
        name: str,
        element_type: TreeElementType,
        description: Optional[str] = None,
    ) -> None:
        self._root = root
        self._parent = parent
        self._element_type: TreeElementType = element_type
        self.name: str = name
        self.description: Optional[str] = description
        self.data: Dict[str, Any] = {}

    @property
    def root(self) -> "RootModelElement":
        return self._root  # type: ignore[return-value]

    @property
    def parent(self) -> Optional["CategoryLikeTreeElement"]:
        return self._parent

    @property
    def element_type(self) -> TreeElementType:
        return self._element_type

    @property
    def is_root(self) -> bool:
        return False

    @property
    def paths(self) -> TreeElementPaths:
        """Address of this element, computed from the current parent chain."""
        segments: List[str] = []
        current: Optional[TreeElement] = self
        while current is not None and not current.is_root:
            segments.append(current.name)
            current = current.parent
        segments.reverse()
        return TreeElementPaths(segments)

    def get_level(self) -> int:
        level = 0
        current = self.parent
        while current is not None:
            level += 1
            current = current.parent
        return level

    def change_parent(self, new_parent: Optional["CategoryLikeTreeElement"]) -> bool:
        """Move this element under ``new_parent``.

        Returns False when the move is not possible: no target, same parent,
        a name clash in the target, or a target inside this element's own
        subtree.
        """
        if new_parent is None or new_parent is self._parent or new_parent is self:
            return False
        if self.element_type not in ("category", "resource"):
            return False

        probe: Optional[TreeElement] = new_parent
        while probe is not None:
            if probe is self:
                return False
            probe = probe.parent

        if new_parent.contains(self.name, self.element_type):  # type: ignore[arg-type]
            return False

        if self._parent is not None:
            self._parent._detach(self)
        new_parent._attach(self)
        self._parent = new_parent
        return True

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.paths.get_parent_path('/', True)!r}>"


class CategoryLikeTreeElement(TreeElement):
    """Element that holds ordered child categories and resources."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._categories: List[CategoryElement] = []
        self._resources: List[ResourceElement] = []

    @property
    def categories(self) -> List["CategoryElement"]:
        return list(self._categories)

    @property
    def resources(self) -> List["ResourceElement"]:
        return list(self._resources)

    @property
    def has_categories(self) -> bool:
        return len(self._categories) > 0

    @property
    def has_resources(self) -> bool:
        return len(self._resources) > 0

    def get_category(self, name: str) -> Optional["CategoryElement"]:
        for category in self._categories:
            if category.name == name:
                return category
        return None

    def get_resource(self, name: str) -> Optional["ResourceElement"]:
        for resource in self._resources:
            if resource.name == name:
                return resource
        return None

    def find(self, name: str, element_type: CategoryOrResourceType) -> Optional[TreeElement]:
        if element_type == "category":
            return self.get_category(name)
        if element_type == "resource":
            return self.get_resource(name)
        return None

    def contains(self, name: str, element_type: CategoryOrResourceType) -> bool:
        return self.find(name, element_type) is not None

    def add_category(self, name: str, description: Optional[str] = None) -> "CategoryElement":
        category = CategoryElement(self.root, self, name, description)
        self._categories.append(category)
        return category

    def add_resource(self, name: str, description: Optional[str] = None) -> "ResourceElement":
        resource = ResourceElement(self.root, self, name, description)
        self._resources.append(resource)
        return resource

    def remove_element(self, element: TreeElement) -> bool:
        if element.parent is not self:
            return False
        removed = self._detach(element)
        if removed:
            element._parent = None
        return removed

    def _attach(self, element: TreeElement) -> None:
        if isinstance(element, CategoryElement):
            self._categories.append(element)
        elif isinstance(element, ResourceElement):
            self._resources.append(element)

    def _detach(self, element: TreeElement) -> bool:
        bucket: List[Any] = self._categories if isinstance(element, CategoryElement) else self._resources
        for idx, child in enumerate(bucket):
            if child is element:
                del bucket[idx]
                return True
        return False


class CategoryElement(CategoryLikeTreeElement):
    def __init__(
        self,
        root: Optional["RootModelElement"],
        parent: Optional[CategoryLikeTreeElement],
        name: str,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(root, parent, name, "category", description)


class ResourceElement(TreeElement):
    """Leaf element carrying one translated value per language."""

    def __init__(
        self,
        root: Optional["RootModelElement"],
        parent: Optional[CategoryLikeTreeElement],
        name: str,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(root, parent, name, "resource", description)
        self.values: Dict[str, str] = {}

    def get_value(self, language: str) -> Optional[str]:
        return self.values.get(language)

    def set_value(self, language: str, value: Optional[str]) -> None:
        if value is None:
            self.values.pop(language, None)
        else:
            self.values[language] = value


class RootModelElement(CategoryLikeTreeElement):
    """Root of the resource tree (element type ``model``).

    Attributes
    ----------
    languages
        Ordered language codes (e.g. ``["en", "de"]``).
    primary_language
        Language used as the source for translations, or None.
    """

    def __init__(
        self,
        name: str,
        languages: Optional[Sequence[str]] = None,
        primary_language: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(None, None, name, "model", description)
        self._root = self
        self._languages: List[str] = []
        for lang in languages or []:
            self.add_language(lang)
        self.primary_language: Optional[str] = primary_language

    @property
    def is_root(self) -> bool:
        return True

    @property
    def languages(self) -> List[str]:
        return list(self._languages)

    def has_language(self, name: str) -> bool:
        return name in self._languages

    def add_language(self, name: str) -> bool:
        if not name or name in self._languages:
            return False
        self._languages.append(name)
        return True

    def remove_language(self, name: str) -> bool:
        """Remove a language together with all of its translations."""
        if name not in self._languages:
            return False
        self._languages.remove(name)
        for element, _leaf in self.iter_tree():
            if isinstance(element, ResourceElement):
                element.values.pop(name, None)
        if self.primary_language == name:
            self.primary_language = None
        return True

    def change_parent(self, new_parent: Optional[CategoryLikeTreeElement]) -> bool:
        return False

    def iter_tree(self) -> Iterator[Tuple[TreeElement, bool]]:
        """Yield ``(element, leaf)`` pairs depth-first in display order.

        The root itself is not yielded. ``leaf`` is True for resources and
        for categories without children.
        """
        stack: List[TreeElement] = list(reversed(self._categories + self._resources))  # type: ignore[operator]
        while stack:
            element = stack.pop()
            if isinstance(element, CategoryElement):
                children: List[TreeElement] = element.categories + element.resources  # type: ignore[operator]
                yield element, not children
                stack.extend(reversed(children))
            else:
                yield element, True

    def iterate_tree(self, callback: Callable[[TreeElement, bool], None]) -> None:
        for element, leaf in self.iter_tree():
            callback(element, leaf)

    def get_element_by_path(
        self,
        element_paths: TreeElementPaths,
        element_type: CategoryOrResourceType,
    ) -> Optional[TreeElement]:
        """Resolve an element by exact path; intermediate segments are categories."""
        segments = element_paths.get_paths(True)
        if not segments:
            return None
        current: Optional[CategoryLikeTreeElement] = self
        for segment in segments[:-1]:
            current = current.get_category(segment) if current is not None else None
            if current is None:
                return None
        return current.find(segments[-1], element_type) if current is not None else None
