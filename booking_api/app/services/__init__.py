"""
Service layer.

Services hold the business logic behind each route group and receive
the database handle from the caller.
"""
