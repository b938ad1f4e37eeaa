"""
API package containing the HTTP routes.

``router.py`` aggregates the per-domain routers found in
``endpoints`` and is mounted under ``/api`` by ``main``.
"""
