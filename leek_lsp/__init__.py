"""Leek Language Server package.

This package provides:
- A pygls-based Language Server for the Leek scripting language.

Note: The LSP never evaluates user buffers; every query is answered from the
syntax tree of the latest revision held by a leek.workspace.Workspace.
"""

__all__ = [
    "server",
]
