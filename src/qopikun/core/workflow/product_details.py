"""Product details updates."""

from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError
from ..models.inspection_report import InspectionReport
from ..models.product_details import ProductDetails


def update_product_details(report: InspectionReport, changes: Dict[str, Any]) -> InspectionReport:
    """
    Merge changes into the report's product details.

    Unknown keys are kept as additional free-form fields.

    Raises:
        ValidationError: If a value has the wrong type
    """
    merged = {**report.product_details.model_dump(), **changes}
    try:
        details = ProductDetails.model_validate(merged)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid product details: {e}") from e

    return report.model_copy(update={"product_details": details})
