"""
Schemas package.

Pydantic models describing request bodies and responses for each
route group.
"""
