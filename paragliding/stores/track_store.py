"""
Track store - persistence for IGC track metadata.

Owns the two insertion-time invariants:
- IDs are assigned as count + 1
- timestamps are strictly increasing across all inserts

Both are computed under one in-process lock together with the insert,
so concurrent submissions never share an ID or a timestamp.
"""

import logging
import threading
import time
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy import delete, func, select

from paragliding.models import Track, session_scope

logger = logging.getLogger(__name__)


class TrackStore:
    """Track metadata persistence backed by SQLAlchemy."""

    def __init__(self, session_factory, clock: Callable[[], int] = time.time_ns):
        self._session_factory = session_factory
        self._clock = clock
        self._insert_lock = threading.Lock()

    def insert(
        self,
        *,
        track_src_url: str,
        recorded_date: Optional[datetime] = None,
        pilot: str = '',
        glider: str = '',
        glider_id: str = '',
        track_length: float = 0.0,
    ) -> Track:
        """
        Insert a new track and return it with its assigned ID and timestamp.

        The ID is count + 1. Only delete_all() removes tracks, so a live ID
        is never handed out twice, but numbering restarts at 1 after it.
        IDs are therefore not unique across the store's whole lifetime.
        """
        with self._insert_lock, session_scope(self._session_factory) as session:
            count = session.scalar(select(func.count()).select_from(Track)) or 0
            last_timestamp = session.scalar(select(func.max(Track.timestamp)))

            timestamp = self._clock()
            if last_timestamp is not None and timestamp <= last_timestamp:
                timestamp = last_timestamp + 1

            track = Track(
                id=count + 1,
                timestamp=timestamp,
                recorded_date=recorded_date,
                pilot=pilot,
                glider=glider,
                glider_id=glider_id,
                track_length=track_length,
                track_src_url=track_src_url,
            )
            session.add(track)

        logger.info(f'Inserted track {track.id} at {track.timestamp}')
        return track

    def find_all(self) -> List[Track]:
        """All tracks in insertion order."""
        with self._session_factory() as session:
            return list(session.scalars(select(Track).order_by(Track.id.asc())))

    def find_all_newest_first(self) -> List[Track]:
        """All tracks ordered by timestamp, most recent first."""
        with self._session_factory() as session:
            return list(session.scalars(select(Track).order_by(Track.timestamp.desc())))

    def find_newer_than(self, timestamp: int) -> List[Track]:
        """Tracks with timestamp strictly greater than the given one, most recent first."""
        with self._session_factory() as session:
            query = (
                select(Track)
                .where(Track.timestamp > timestamp)
                .order_by(Track.timestamp.desc())
            )
            return list(session.scalars(query))

    def find_by_id(self, track_id: int) -> Optional[Track]:
        with self._session_factory() as session:
            return session.get(Track, track_id)

    def latest(self) -> Optional[Track]:
        """Most recently inserted track, or None when the store is empty."""
        with self._session_factory() as session:
            return session.scalars(
                select(Track).order_by(Track.timestamp.desc()).limit(1)
            ).first()

    def count(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(Track)) or 0

    def delete_all(self) -> int:
        """Remove every track. Returns the number of deleted rows."""
        with self._insert_lock, session_scope(self._session_factory) as session:
            result = session.execute(delete(Track))
            deleted = result.rowcount or 0

        logger.warning(f'Deleted all tracks ({deleted} rows)')
        return deleted
