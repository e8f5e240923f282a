"""
Interfaces layer package.

HTTP surface of the service: FastAPI routers, Pydantic schemas and the
composition root that builds use cases for each request.
"""
