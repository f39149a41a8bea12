"""Parents module - Parent accounts and contact details."""

from app.modules.parents.models import Parent
from app.modules.parents.repository import ParentRepository

__all__ = ["Parent", "ParentRepository"]
