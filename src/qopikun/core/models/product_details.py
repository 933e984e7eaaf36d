"""
Product details model.

Free-form descriptive fields about the item under inspection. The common
fields are declared explicitly; additional fields are accepted and kept so
that customers can record whatever identification their paperwork uses.
"""

from pydantic import BaseModel, ConfigDict


class ProductDetails(BaseModel):
    """Descriptive information about the inspected product."""

    part_name: str = ""
    part_number: str = ""
    drawing_number: str = ""
    revision: str = ""
    serial_number: str = ""
    material: str = ""
    customer: str = ""
    purchase_order: str = ""

    model_config = ConfigDict(frozen=True, extra="allow")
