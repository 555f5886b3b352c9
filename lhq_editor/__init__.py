"""Top-level package of the LHQ editor tree core.

This package hosts the GUI-agnostic implementation behind the LHQ resource
tree view. Front-ends should only depend on the public API exposed here
rather than importing internal modules directly.
"""

from .core.context import AppContext, SelectionFlags, compute_selection_flags
from .core.elements import VirtualRootElement, is_virtual_tree_element
from .core.models import RootModelElement
from .core.search import match_for_substring, resolve
from .core.validator import validate_name

__all__: list[str] = [
    "AppContext",
    "SelectionFlags",
    "compute_selection_flags",
    "VirtualRootElement",
    "is_virtual_tree_element",
    "RootModelElement",
    "match_for_substring",
    "resolve",
    "validate_name",
]
