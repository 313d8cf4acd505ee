"""Integrations subpackage for inspector-tree.

Contains the pytest plugin, auto-discovered via the ``pytest11`` entry point.
"""
