"""
API package containing the route groups.

``router`` bundles every domain router; new domains are added by
creating a module under ``endpoints`` and including it there.
"""
