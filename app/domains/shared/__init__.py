"""Shared domain components - Generic patterns and utilities."""

from app.domains.shared.repository import GenericRepository
from app.domains.shared.specifications import Specification, all_of

__all__ = ["GenericRepository", "Specification", "all_of"]
