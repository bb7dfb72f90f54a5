"""AttoLisp Language Server package.

This package provides:
- A pygls-based Language Server for AttoLisp.
- A lightweight indexer that scans documents with the interpreter's tokenizer.
- Diagnostics and editor features computed from that index.

Note: The LSP does not evaluate user buffers; it builds a static index from text.
"""

__all__ = [
    "server",
    "indexer",
    "diagnostics",
    "features",
]
