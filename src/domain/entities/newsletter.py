"""Newsletter subscriber entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4


@dataclass
class NewsletterSubscriber:
    name: str
    email: str
    id: str = field(default_factory=lambda: str(uuid4()))
    subscribed_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "subscribed_at": self.subscribed_at.isoformat(),
        }
