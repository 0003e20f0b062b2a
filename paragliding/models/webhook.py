"""
Webhook model - a subscriber to new-track notifications.

Each row is an independent counter with a fire threshold: the counter
grows by one on every track insertion and is reset to zero when it
reaches min_trigger_value.
"""

import secrets

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from paragliding.models.base import Base

WEBHOOK_ID_LENGTH = 24


def new_webhook_id() -> str:
    """Store-assigned opaque ID: 24 lowercase hex characters."""
    return secrets.token_hex(WEBHOOK_ID_LENGTH // 2)


class Webhook(Base):
    """Registered notification target."""

    __tablename__ = 'webhooks'

    id: Mapped[str] = mapped_column(
        String(WEBHOOK_ID_LENGTH),
        primary_key=True,
        default=new_webhook_id,
    )

    url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        unique=True,
        comment='Destination for POST notifications'
    )

    min_trigger_value: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment='New tracks required before a notification fires'
    )

    pending_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment='New tracks seen since the last notification'
    )

    def __repr__(self) -> str:
        return f'<Webhook {self.id} {self.url} {self.pending_count}/{self.min_trigger_value}>'

    def to_dict(self) -> dict:
        """Public JSON view. pending_count stays internal."""
        return {
            'webhookURL': self.url,
            'minTriggerValue': self.min_trigger_value,
        }
