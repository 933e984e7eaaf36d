"""
Business logic services.

This module provides the service layer that orchestrates repositories and
the pure workflow operations. All services use dependency injection to
receive their repositories, enabling:
- Easy testing (can use in-memory databases or mocks)
- Flexible implementations (can swap repositories)
- Clean separation of concerns

Services provided:
- IdentityService: Authentication and user administration
- InspectionService: Scheduling, listing and opening inspections
- InspectionSession: The live report of an open inspection room
- DraftService: Draft caching and resume reconciliation
- TaskService: Inspector task lists
- GdtImageGenerator / HttpGdtImageGenerator: GD&T image generation
"""

from .identity_service import IdentityService
from .draft_service import DraftService, ResumeResult
from .image_generation import GdtImageGenerator, HttpGdtImageGenerator
from .inspection_session import InspectionSession
from .inspection_service import InspectionService
from .task_service import TaskService

__all__ = [
    "IdentityService",
    "DraftService",
    "ResumeResult",
    "GdtImageGenerator",
    "HttpGdtImageGenerator",
    "InspectionSession",
    "InspectionService",
    "TaskService"
]
