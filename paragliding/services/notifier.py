"""
Webhook notifier - trigger accumulation and delivery.

Called once per track insertion. Each subscription is a counter with a
fire threshold: the store increments every counter, and the ones that
reach their threshold are reset and receive a message listing the
newest track IDs.

Counters are reset before delivery and never rolled back, so a failed
POST loses that notification (at-most-once).
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from paragliding.services.delivery import WebhookDelivery
from paragliding.services.ticker import elapsed_ms
from paragliding.stores import TrackStore, WebhookStore

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    """Message for one fired subscription."""
    url: str
    t_latest: int
    tracks: List[int] = field(default_factory=list)
    processing: float = 0.0  # milliseconds

    def human_readable(self) -> str:
        ids = ','.join(f'id{track_id}' for track_id in self.tracks)
        return (
            f'Latest timestamp: {self.t_latest}, {len(self.tracks)} new tracks are {ids}.'
            f'(processing:{self.processing}ms)'
        )

    def to_message(self) -> dict:
        """Body with a 'content' field, as chat webhook receivers expect."""
        return {'content': self.human_readable()}


class WebhookNotifier:
    """
    Aggregates new-track events and notifies subscribers.

    The track read and the counter scan run under one lock so that two
    concurrent submissions cannot interleave between them.
    """

    def __init__(self, track_store: TrackStore, webhook_store: WebhookStore, delivery: WebhookDelivery):
        self.track_store = track_store
        self.webhook_store = webhook_store
        self.delivery = delivery
        self._lock = threading.Lock()

    def collect(self) -> List[Notification]:
        """
        Count one new track for every subscription and build the
        notifications for those that fired.

        Store errors propagate; nothing has been reset when they do.
        """
        start = time.perf_counter()

        with self._lock:
            tracks = self.track_store.find_all_newest_first()
            fired = self.webhook_store.invoke()

        if not fired:
            return []
        if not tracks:
            logger.warning(f'{len(fired)} webhooks fired with no tracks stored')
            return []

        t_latest = tracks[0].timestamp
        notifications = []
        for hook in fired:
            notification = Notification(
                url=hook.url,
                t_latest=t_latest,
                tracks=[t.id for t in tracks[:hook.pending_count]],
            )
            notification.processing = elapsed_ms(start)
            notifications.append(notification)
        return notifications

    def on_track_inserted(self) -> int:
        """
        Run one notifier pass. Returns the number of successful deliveries.

        Never raises for store or delivery failures: the track is already
        saved and notification is best-effort.
        """
        try:
            notifications = self.collect()
        except SQLAlchemyError as e:
            logger.error(f'Webhook notification pass aborted: {e}')
            return 0

        delivered = 0
        for notification in notifications:
            logger.info(f'Notifying {notification.url}: {len(notification.tracks)} new tracks')
            if self.delivery.deliver(notification.url, notification.to_message()):
                delivered += 1

        return delivered
