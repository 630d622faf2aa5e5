"""
Version 1 of the API.

Every handler returns the standard envelope
``{success, data?, message, error?}`` described in ``schemas.common``.
"""
