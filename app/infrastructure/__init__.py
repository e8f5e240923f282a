"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: SQL repositories built on
SQLAlchemy Core and the in-process client lock registry.
"""
