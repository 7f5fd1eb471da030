"""Infrastructure Layer: external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - All external calls carry a timeout and map failures to core/errors.py types
"""
