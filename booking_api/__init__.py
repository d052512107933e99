"""
Top-level package for the Booking Platform API.

All functionality lives in submodules under ``app``; the package itself
provides no public exports.
"""

__all__ = []
