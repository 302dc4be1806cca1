"""Favorite entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from .property import Property


@dataclass
class Favorite:
    """A tenant bookmarking a property."""

    tenant_id: str
    property_id: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.utcnow)
    property: Optional[Property] = None
