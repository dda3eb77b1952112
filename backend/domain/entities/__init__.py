"""
Domain Entities

Shared identity and lifecycle state embedded by the aggregates.
"""

from domain.entities.entity_state import EntityState, generate_id

__all__ = ["EntityState", "generate_id"]
