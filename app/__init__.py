"""
InvestBoard: investment advisory backend.

Application package root, organised as ports & adapters around a
single bounded context:

    advisory: product risk tiers, adaptive client risk ceilings,
        compound growth simulations and the investment ledger.

Packages:
    - domain: rules, entities, ports (ABCs) and errors. No IO.
    - application: one use case per operation, plus DTOs.
    - infrastructure: SQLAlchemy repositories and client locks.
    - interfaces: FastAPI routers, Pydantic schemas, dependency wiring.
    - shared: logging, error mapping, security middleware, rate limits.
    - core: settings.
"""
