"""
Registration Requests Module

Handles the student registration workflow: parents submit requests,
administrators approve (creating the student) or reject them.
"""

from app.modules.registration_requests.models import RegistrationRequest, RequestStatus
from app.modules.registration_requests.router import router

__all__ = [
    "router",
    "RegistrationRequest",
    "RequestStatus",
]
