"""
Shared error handling package.

Turns advisory domain errors into JSON error responses.
"""
