"""GUI-agnostic core: tree model, virtual elements, search, validation, selection context."""
