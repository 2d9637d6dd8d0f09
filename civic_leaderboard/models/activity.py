from datetime import datetime
from typing import Optional
from pydantic import BaseModel


# Report statuses that matter for scoring
STATUS_RESOLVED = "Resolved"
STATUS_FAKE = "Fake Report"


class ActivityRecord(BaseModel):
    """A single report submitted by a citizen (read-only, owned by the report store)"""

    report_id: Optional[str] = None
    created_at: datetime
    status: str = "Pending"
    has_photo: bool = False

    class Config:
        frozen = True

    @property
    def is_resolved(self) -> bool:
        return self.status == STATUS_RESOLVED

    @property
    def is_fake(self) -> bool:
        return self.status == STATUS_FAKE
