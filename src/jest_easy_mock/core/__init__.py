"""
Core Package.

Contains the rewriting logic:
- Syntax layer (tree-sitter parsing, node model, lossless printer)
- Collection, aggregation and emission passes
- Engine and trace logging
"""
