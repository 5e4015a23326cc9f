"""Paid client/advocate connection"""
from datetime import datetime
from typing import Literal

from .base import Record

ConnectionStatus = Literal["pending", "active", "expired", "cancelled"]


class Connection(Record):
    advocate_id: str
    client_id: str
    status: ConnectionStatus = "pending"
    payment_id: str | None = None
    created_at: datetime
    expires_at: datetime
