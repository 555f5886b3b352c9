"""UI controllers for the LHQ editor tree.

Controllers mediate between a host tree widget and the core services.
"""

from .tree_controller import TreeController

__all__: list[str] = ["TreeController"]
