"""
HTTP-level tests for the todo API.

Tests use the Flask test client and cover status codes, response bodies
and the JSON error envelope.
"""
