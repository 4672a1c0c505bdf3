"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Privileged routes declare the credential gate as a dependency

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
