"""
Service layer.

Each service encapsulates business logic for a domain and talks to
``core.storage``; API handlers only translate results and errors.
"""
