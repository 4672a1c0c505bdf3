"""Services Layer — orchestration that spans more than one read/write.

Invariants:
    - Services receive an AsyncSession and collaborators explicitly (no globals)
    - Services raise EventSiteError subclasses; routes never translate errors

Design Decisions:
    - One module per workflow: order lifecycle, site config, content, sales stats
"""
