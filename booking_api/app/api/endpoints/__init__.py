"""
Endpoint modules, one per route group.
"""
