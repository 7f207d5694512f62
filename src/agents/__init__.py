"""
Agent implementations for the satisfaction statistics core.

Contains the two stages every query passes through:
- Ingestion (Record Loader)
- Aggregation (descriptive statistics engine)
"""
