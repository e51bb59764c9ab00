# Leek language tooling core.
#
# - leek.buffer:   editable text with an offset <-> (line, character) index
# - leek.reader:   recursive-descent parser producing span-tagged syntax trees
# - leek.analysis: read-only queries over a parsed tree
# - leek.document / leek.workspace: per-document state and the open-document table
#
# Nothing here knows about a transport; leek_lsp wires it to a language client.

__version__ = "0.1.0"
