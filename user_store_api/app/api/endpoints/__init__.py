"""
Endpoint modules.

Each module defines an APIRouter for one area (player-facing user
routes, admin routes).  They are aggregated in ``api/router.py``.
"""
