"""Infrastructure Layer — clients for the hosted store and auth provider, plus logging.

Invariants:
    - Infrastructure never imports from api/
    - All external failures mapped to StorefrontError subclasses (core/errors.py)

Design Decisions:
    - Thin wrappers over SQLAlchemy / httpx: no retries, one call per operation
"""
