"""
Infrastructure Layer - Persistence and static reference data.

- repositories/: SQLAlchemy-backed record store
- regulatory_data: published regulatory tables
"""
