"""
Evidence model.

Evidence is a captured image (usually a photo from the inspector's camera)
attached either to the report as a whole or to an individual inspection
parameter. Evidence items are immutable once created; collections of
evidence are append-only apart from explicit removal by index.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Evidence(BaseModel):
    """
    A single piece of photographic evidence.

    Fields:
    - captured_at: When the image was captured (UTC)
    - image_data: Encoded image (typically a data URL)
    - caption: Optional free-text caption
    - metadata: Additional capture information (device, camera, etc.)
    """

    captured_at: datetime = Field(default_factory=_utc_now)

    image_data: str

    caption: Optional[str] = None

    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
