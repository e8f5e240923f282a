"""
Advisory bounded context: domain layer.

This module contains all domain logic for the advisory context:
- Risk tier classification
- Yield band selection
- Compound growth simulation
- Portfolio tier aggregation and adaptive risk-limit adjustment
"""
