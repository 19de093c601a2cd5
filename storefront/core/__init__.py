"""Core Layer — domain types, error hierarchy, and capability contracts. No IO.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/

Design Decisions:
    - Capabilities (store, auth) described as Protocols here, implemented in infrastructure/
"""
