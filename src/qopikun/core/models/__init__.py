"""
Domain models.

All models are frozen pydantic models; updates produce new instances.
"""

from .evidence import Evidence
from .inspection_parameter import InspectionParameter
from .inspection_report import InspectionReport
from .inspector_task import InspectorTask
from .product_details import ProductDetails
from .signature import Signature
from .user import User, UserProfile

__all__ = [
    "Evidence",
    "InspectionParameter",
    "InspectionReport",
    "InspectorTask",
    "ProductDetails",
    "Signature",
    "User",
    "UserProfile",
]
