"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes translate HTTP to service calls and service results to JSON, nothing more
"""
