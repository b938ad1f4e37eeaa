"""
Application package initializer.

The service is split into a few small pieces: ``core`` holds
configuration, logging, errors and the file storage helpers,
``schemas`` the request/response models, ``services`` the business
logic and ``api`` the HTTP routers that call into the services.
"""

from .main import app  # noqa: F401
