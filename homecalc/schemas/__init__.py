"""Pydantic Schemas: declared shapes for requests, model outputs and tool I/O.

Invariants:
    - Schemas validate at every boundary (caller input, model output, tool I/O)
    - Top-level shapes forbid unknown fields
    - Wire names are camelCase; Python attributes are snake_case
"""
