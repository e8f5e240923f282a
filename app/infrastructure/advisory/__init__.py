"""
Infrastructure adapters for the advisory bounded context.

Each adapter implements a domain port (ABC) and connects
to external systems: the relational store and process-local locks.
"""
