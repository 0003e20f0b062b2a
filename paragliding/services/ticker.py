"""
Ticker feed - paginated, time-ordered views over the track store.

Tracks are ordered by insertion timestamp, most recent first. The same
ordering is used by the webhook notifier to pick the newest track IDs.
Every view is capped to `cap` IDs per response.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from paragliding.models import Track
from paragliding.stores import TrackStore

logger = logging.getLogger(__name__)

DEFAULT_CAP = 5


def newest_first(tracks: List[Track]) -> List[Track]:
    """Sort tracks by timestamp descending."""
    return sorted(tracks, key=lambda t: t.timestamp, reverse=True)


def elapsed_ms(start: float) -> float:
    """Milliseconds since a time.perf_counter() reading, rounded like the other timing fields."""
    return round((time.perf_counter() - start) * 1000, 2)


@dataclass
class TickerPage:
    """One page of the ticker feed."""
    t_latest: int
    t_start: int
    t_stop: int
    tracks: List[int] = field(default_factory=list)
    processing: float = 0.0  # milliseconds

    def to_dict(self) -> dict:
        return {
            't_latest': self.t_latest,
            't_start': self.t_start,
            't_stop': self.t_stop,
            'tracks': self.tracks,
            'processing': self.processing,
        }


class TickerFeed:
    """
    Read-only polling feed over the track store.

    Every method returns None when there is nothing to report; the API
    layer turns that into 204 No Content.
    """

    def __init__(self, track_store: TrackStore, cap: int = DEFAULT_CAP):
        self.track_store = track_store
        self.cap = cap

    def latest_timestamp(self) -> Optional[int]:
        """Timestamp of the most recently inserted track."""
        latest = self.track_store.latest()
        if latest is None:
            return None
        return latest.timestamp

    def timestamps(self) -> Optional[TickerPage]:
        """First page over all tracks."""
        start = time.perf_counter()
        return self._build_page(self.track_store.find_all_newest_first(), start)

    def timestamps_newer_than(self, timestamp: int) -> Optional[TickerPage]:
        """First page over tracks inserted strictly after `timestamp`."""
        start = time.perf_counter()
        return self._build_page(self.track_store.find_newer_than(timestamp), start)

    def _build_page(self, tracks: List[Track], start: float) -> Optional[TickerPage]:
        if not tracks:
            return None

        ordered = newest_first(tracks)

        # t_latest is the sorted maximum, so it always equals t_start
        page = TickerPage(
            t_latest=ordered[0].timestamp,
            t_start=ordered[0].timestamp,
            t_stop=ordered[-1].timestamp,
            tracks=[t.id for t in ordered[:self.cap]],
        )
        page.processing = elapsed_ms(start)

        logger.debug(f'Ticker page: {len(page.tracks)} of {len(ordered)} tracks')
        return page
