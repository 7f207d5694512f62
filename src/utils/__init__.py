"""
Utility modules.

Cross-cutting helpers:
- Buckets: age-group and flight-distance ranges
- Report: text composition of query results
- Tables: pandas views of record lists
"""
