"""Toolkit-neutral presentation layer of the LHQ editor tree."""
