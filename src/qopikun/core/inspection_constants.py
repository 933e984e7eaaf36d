"""
Inspection constants and utilities.

This module defines the fixed vocabularies used throughout the application:
user roles, tolerance types, parameter and inspection statuses, and the
static table of GD&T (geometric dimensioning and tolerancing) symbols.

Values are plain strings so they serialize unchanged into drafts and the
database. Each vocabulary comes with:
- A list of valid values (for validation)
- Display name mapping (for UI presentation)
- Validation functions

If adding new values, ensure all places that branch on them are updated
(in particular the tolerance resolver for tolerance types).
"""

from typing import Dict, List, Optional

# User roles
ROLE_ADMIN = "ADMIN"
ROLE_INSPECTOR = "INSPECTOR"
ROLE_SUPERVISOR = "SUPERVISOR"
ROLE_CUSTOMER = "CUSTOMER"
ROLE_THIRD_PARTY_INSPECTOR = "THIRD_PARTY_INSPECTOR"

USER_ROLES = [
    ROLE_ADMIN,
    ROLE_INSPECTOR,
    ROLE_SUPERVISOR,
    ROLE_CUSTOMER,
    ROLE_THIRD_PARTY_INSPECTOR,
]

# Roles that attend an inspection room and can co-sign the result
# Admins manage users and schedules but never sign reports
SIGN_OFF_ROLES = [
    ROLE_INSPECTOR,
    ROLE_SUPERVISOR,
    ROLE_CUSTOMER,
    ROLE_THIRD_PARTY_INSPECTOR,
]

ROLE_DISPLAY_NAMES = {
    ROLE_ADMIN: "Administrator",
    ROLE_INSPECTOR: "Inspector",
    ROLE_SUPERVISOR: "Supervisor",
    ROLE_CUSTOMER: "Customer",
    ROLE_THIRD_PARTY_INSPECTOR: "Third-Party Inspector",
}

# Tolerance types
TOLERANCE_BILATERAL = "+/-"
TOLERANCE_PLUS = "+"
TOLERANCE_MINUS = "-"

TOLERANCE_TYPES = [TOLERANCE_BILATERAL, TOLERANCE_PLUS, TOLERANCE_MINUS]

# Parameter statuses
STATUS_PENDING = "PENDING"
STATUS_PASS = "PASS"
STATUS_FAIL = "FAIL"

PARAMETER_STATUSES = [STATUS_PENDING, STATUS_PASS, STATUS_FAIL]

# Final inspection statuses
INSPECTION_ACCEPTED = "ACCEPTED"
INSPECTION_REJECTED = "REJECTED"
INSPECTION_ON_HOLD = "ON_HOLD"

INSPECTION_STATUSES = [INSPECTION_ACCEPTED, INSPECTION_REJECTED, INSPECTION_ON_HOLD]

INSPECTION_STATUS_DISPLAY_NAMES = {
    INSPECTION_ACCEPTED: "Accepted",
    INSPECTION_REJECTED: "Rejected",
    INSPECTION_ON_HOLD: "On Hold",
}

# Sentinel stored in InspectionParameter.gdt_image while generation is in flight
GDT_IMAGE_LOADING = "loading"

# Standard GD&T characteristic symbols (ASME Y14.5)
# Each entry carries the display name, the symbol code stored on parameters,
# and the characteristic category
GDT_SYMBOLS: List[Dict[str, str]] = [
    {"name": "Straightness", "symbol": "⏤", "category": "Form"},
    {"name": "Flatness", "symbol": "⏥", "category": "Form"},
    {"name": "Circularity", "symbol": "○", "category": "Form"},
    {"name": "Cylindricity", "symbol": "⌭", "category": "Form"},
    {"name": "Profile of a Line", "symbol": "⌒", "category": "Profile"},
    {"name": "Profile of a Surface", "symbol": "⌓", "category": "Profile"},
    {"name": "Angularity", "symbol": "∠", "category": "Orientation"},
    {"name": "Perpendicularity", "symbol": "⟂", "category": "Orientation"},
    {"name": "Parallelism", "symbol": "∥", "category": "Orientation"},
    {"name": "Position", "symbol": "⌖", "category": "Location"},
    {"name": "Concentricity", "symbol": "◎", "category": "Location"},
    {"name": "Symmetry", "symbol": "⌯", "category": "Location"},
    {"name": "Circular Runout", "symbol": "↗", "category": "Runout"},
    {"name": "Total Runout", "symbol": "⌰", "category": "Runout"},
]


def validate_role(role: str) -> bool:
    """
    Validate that a role is one of the known user roles.

    Example:
        validate_role("SUPERVISOR") → True
        validate_role("GUEST") → False
    """
    return role in USER_ROLES


def validate_tolerance_type(tolerance_type: str) -> bool:
    """Validate that a tolerance type is one of "+/-", "+" or "-"."""
    return tolerance_type in TOLERANCE_TYPES


def validate_inspection_status(status: str) -> bool:
    """Validate that a final inspection status is known."""
    return status in INSPECTION_STATUSES


def get_role_display_name(role: str) -> str:
    """
    Get display name for a role.

    Falls back to the role identifier unchanged if no display name is
    defined.

    Example:
        get_role_display_name("THIRD_PARTY_INSPECTOR") → "Third-Party Inspector"
    """
    return ROLE_DISPLAY_NAMES.get(role, role)


def find_gdt_symbol(symbol: str) -> Optional[Dict[str, str]]:
    """
    Look up a GD&T symbol entry by its symbol code.

    Args:
        symbol: Symbol code as stored on InspectionParameter.gdt_symbol

    Returns:
        The matching entry (name, symbol, category), or None if unknown
    """
    for entry in GDT_SYMBOLS:
        if entry["symbol"] == symbol:
            return entry
    return None
