"""Core Layer: pure domain logic for the AI invocation contract.

Invariants:
    - Nothing in core/ performs I/O or imports from infrastructure/ or services/
    - Validation and normalization are deterministic functions of their inputs
"""
