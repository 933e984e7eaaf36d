"""
Demo data for a fresh database.

Creates the default accounts and two sample inspections so a new
installation has something to log in with. Seeding only runs against an
empty users table.
"""

import logging

from ..core.inspection_constants import ROLE_ADMIN, ROLE_INSPECTOR, ROLE_SUPERVISOR
from ..core.services.identity_service import IdentityService
from ..core.services.inspection_service import InspectionService

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"

DEMO_USERS = [
    ("admin", ROLE_ADMIN),
    ("inspector1", ROLE_INSPECTOR),
    ("supervisor1", ROLE_SUPERVISOR),
    ("inspector2", ROLE_INSPECTOR),
]

# (title, username of the owning inspector)
DEMO_INSPECTIONS = [
    ("Sample Inspection for Turbine Blade", "inspector1"),
    ("FAI for Landing Gear Strut", "inspector2"),
]


def seed_demo_data(identity_service: IdentityService, inspection_service: InspectionService) -> bool:
    """
    Seed demo users and inspections if there are no users yet.

    Returns:
        True if data was seeded, False if the database already had users
    """
    if identity_service.list_users():
        return False

    users = {}
    for username, role in DEMO_USERS:
        users[username] = identity_service.create_user(username, DEMO_PASSWORD, role)

    for title, username in DEMO_INSPECTIONS:
        inspection_service.schedule_inspection(title, users[username].id)

    logger.info(f"Seeded {len(DEMO_USERS)} demo users and {len(DEMO_INSPECTIONS)} inspections")
    return True
