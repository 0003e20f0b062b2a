"""
Webhook store - persistence for notification subscriptions.

The invoke() scan is the one read-modify-write in the system: every
pending counter is incremented, compared against its threshold and
reset when it fires. It runs as a single transaction under an
in-process lock. The lock only covers one process; running several
API instances against the same database relies on the row locks the
UPDATE takes inside that transaction.
"""

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from paragliding.exceptions import AlreadyExists
from paragliding.models import Webhook, session_scope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FiredWebhook:
    """A subscription that reached its threshold during one invoke() scan."""
    id: str
    url: str
    min_trigger_value: int
    pending_count: int  # Counter value at the moment it fired


class WebhookStore:
    """Webhook subscription persistence backed by SQLAlchemy."""

    def __init__(self, session_factory):
        self._session_factory = session_factory
        self._invoke_lock = threading.Lock()

    def insert_if_absent(self, url: str, min_trigger_value: int) -> Webhook:
        """
        Persist a new subscription with a zero pending counter.

        Raises AlreadyExists when the URL is already registered.
        """
        try:
            with session_scope(self._session_factory) as session:
                existing = session.scalars(
                    select(Webhook.id).where(Webhook.url == url)
                ).first()
                if existing is not None:
                    raise AlreadyExists(f'The webhook {url} already exists')

                webhook = Webhook(url=url, min_trigger_value=min_trigger_value, pending_count=0)
                session.add(webhook)
        except IntegrityError as e:
            # Lost a race against a concurrent registration of the same URL
            raise AlreadyExists(f'The webhook {url} already exists') from e

        logger.info(f'Registered webhook {webhook.id} -> {url} (trigger {min_trigger_value})')
        return webhook

    def find(self, webhook_id: str) -> Optional[Webhook]:
        with self._session_factory() as session:
            return session.get(Webhook, webhook_id)

    def delete(self, webhook_id: str) -> Optional[Webhook]:
        """Remove a subscription, returning its last stored state."""
        with session_scope(self._session_factory) as session:
            webhook = session.get(Webhook, webhook_id)
            if webhook is None:
                return None
            session.delete(webhook)

        logger.info(f'Deleted webhook {webhook_id}')
        return webhook

    def invoke(self) -> List[FiredWebhook]:
        """
        Count one new track for every subscription.

        Returns the subscriptions whose counter reached min_trigger_value;
        their counters are reset to zero in the same transaction.
        """
        with self._invoke_lock, session_scope(self._session_factory) as session:
            session.execute(
                update(Webhook)
                .values(pending_count=Webhook.pending_count + 1)
                .execution_options(synchronize_session=False)
            )

            due = session.scalars(
                select(Webhook).where(Webhook.pending_count >= Webhook.min_trigger_value)
            ).all()
            fired = [
                FiredWebhook(
                    id=w.id,
                    url=w.url,
                    min_trigger_value=w.min_trigger_value,
                    pending_count=w.pending_count,
                )
                for w in due
            ]

            if fired:
                session.execute(
                    update(Webhook)
                    .where(Webhook.id.in_([f.id for f in fired]))
                    .values(pending_count=0)
                    .execution_options(synchronize_session=False)
                )

        logger.debug(f'Webhook invoke: {len(fired)} fired')
        return fired
