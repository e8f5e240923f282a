"""
Shared module package.

Cross-cutting pieces used by the HTTP layer: logging setup, domain
error mapping, response hardening and rate limits.
"""
