"""Newsletter schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class SubscribeRequestSchema(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class SubscribeResponseSchema(BaseModel):
    success: bool
    message: str
    download_url: Optional[str] = None


class SubscriberSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    subscribed_at: datetime


class SubscriberListSchema(BaseModel):
    success: bool = True
    count: int
    subscribers: List[SubscriberSchema]


class SubscriberResponseSchema(BaseModel):
    success: bool = True
    subscriber: SubscriberSchema
