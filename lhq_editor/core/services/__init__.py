from __future__ import annotations

"""High-level services operating on the resource tree (editing, advanced find)."""

from .tree_editing_service import OperationResult, TreeEditingService  # noqa: F401
from .search_service import AdvancedFindService, SearchTreeOptions  # noqa: F401

__all__: list[str] = [
    "OperationResult",
    "TreeEditingService",
    "AdvancedFindService",
    "SearchTreeOptions",
]
