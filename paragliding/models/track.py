"""
Track model - metadata of one analyzed IGC flight log.

Rows are append-only: a track is never updated after insertion and is
only removed by the admin delete-all operation.

Design notes:
- `id` is assigned by the TrackStore as count + 1, not autoincremented
- `timestamp` is a nanosecond insertion stamp used purely for ordering
  and is left out of the public JSON view
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from paragliding.models.base import Base


class Track(Base):
    """Stored metadata for a submitted IGC file."""

    __tablename__ = 'tracks'

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        comment='Public track ID (count + 1 at insert)'
    )

    timestamp: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        unique=True,
        index=True,
        comment='Strictly increasing insertion stamp in nanoseconds'
    )

    recorded_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True,
        comment='Flight date from the IGC header (H_date)'
    )

    pilot: Mapped[str] = mapped_column(String(255), default='')

    glider: Mapped[str] = mapped_column(
        String(255),
        default='',
        comment='Glider type'
    )

    glider_id: Mapped[str] = mapped_column(String(255), default='')

    track_length: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        comment='Sum of distances between consecutive fixes, in metres'
    )

    track_src_url: Mapped[str] = mapped_column(String(2048), nullable=False)

    def __repr__(self) -> str:
        return f'<Track {self.id} @ {self.timestamp}>'

    @property
    def h_date_display(self) -> str:
        """H_date as text; empty when the IGC header had no date."""
        if self.recorded_date is None:
            return ''
        return self.recorded_date.isoformat()

    def to_dict(self) -> dict:
        """Public JSON view. The ordering timestamp is not exposed."""
        return {
            'H_date': self.h_date_display,
            'pilot': self.pilot,
            'glider': self.glider,
            'glider_id': self.glider_id,
            'track_length': self.track_length,
            'track_src_url': self.track_src_url,
        }

    def field_text(self, name: str) -> Optional[str]:
        """
        Single field rendered as text/plain, or None for unknown fields.

        track_length is rendered with six decimals.
        """
        if name == 'H_date':
            return self.h_date_display
        if name == 'pilot':
            return self.pilot
        if name == 'glider':
            return self.glider
        if name == 'glider_id':
            return self.glider_id
        if name == 'track_length':
            return f'{self.track_length:.6f}'
        if name == 'track_src_url':
            return self.track_src_url
        return None
