"""Services Layer: model invocation, tool dispatch and the three AI flows.

Invariants:
    - Flows are stateless; every call builds its own prompt, messages and context
    - The only hard boundary is schema validation; prompt rules are best effort
"""
