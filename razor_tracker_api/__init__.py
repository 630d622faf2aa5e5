"""
Top‑level package for the Razor Tracker API.

All functionality lives in submodules under ``app``; the package
itself exports nothing so that importing it has no side effects.
"""

__all__ = []
