"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Exactly one handler per (method, path); no substring URL matching

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
