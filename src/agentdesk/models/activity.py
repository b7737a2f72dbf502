"""Activity feed record."""

from dataclasses import dataclass
from typing import Any, Optional

ACTIVITY_STATUSES = ("success", "failed", "pending")


@dataclass(frozen=True)
class ActivityRecord:
    """An immutable entry in the activity log."""

    id: int
    timestamp: int
    action_type: str
    description: str
    status: str
    metadata: Optional[dict[str, Any]] = None
    source: str = "agent"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "actionType": self.action_type,
            "description": self.description,
            "status": self.status,
            "metadata": self.metadata,
            "source": self.source,
        }
