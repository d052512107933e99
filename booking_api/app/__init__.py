"""
Application package initializer.

The application is organised by concern: ``core`` holds configuration,
logging and the database connector, ``api`` the routers, ``schemas``
the request and response models and ``services`` the business logic
for each route group.
"""

from .main import app  # noqa: F401
