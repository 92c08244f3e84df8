"""
Pydantic schemas for request/response validation.

JSON field names are camelCase on the wire; request bodies also accept the
snake_case attribute names.
"""
