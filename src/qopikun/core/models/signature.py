"""
Signature model for multi-role sign-off.

One Signature is recorded per role on an inspection report. A role with no
entry in the report's signature map has not signed yet.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict


class Signature(BaseModel):
    """Attestation recorded by one role against a report."""

    signed: bool = True

    # Free-text comment entered when signing (may be empty)
    comment: str = ""

    timestamp: datetime

    model_config = ConfigDict(frozen=True)
