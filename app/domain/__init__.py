"""
Domain layer package.

Holds the advisory rules: risk tiers, yield bands, compound growth,
tier aggregation and the adaptive risk-limit adjuster, together with
the entities they work on and the ports they need.
Standard library only. No IO.
"""
