"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Only value types and errors are imported from core/, never domain logic
    - All external calls wrapped with error mapping to core/errors.py

Design Decisions:
    - Thin adapters over SDKs and the filesystem, injectable through FastAPI dependencies
"""
