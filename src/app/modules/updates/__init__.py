"""Updates module - School news shown on the landing page."""

from app.modules.updates.models import SchoolUpdate
from app.modules.updates.repository import UpdateRepository

__all__ = ["SchoolUpdate", "UpdateRepository"]
