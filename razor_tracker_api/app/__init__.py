"""
Application package initializer.

The service is split into the HTTP surface (``api``), request and
response shapes (``schemas``), business rules (``services``) and the
persistence gateway (``storage``).  Shared infrastructure such as
configuration, logging and the SQLite migrations lives in ``core``.
"""

from .main import app  # noqa: F401
