"""
IGC file client and parser.

Handles turning a submitted URL into track metadata:
- Downloading the IGC file over HTTP (bounded timeout)
- Parsing header and fix (B) records with aerofiles
- Computing the track length from consecutive fixes

Only metadata is kept; the raw file content is discarded after parsing.
"""

import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Tuple

import numpy as np
import requests
from aerofiles.igc import Reader

from paragliding.exceptions import IGCParseError

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6371000.0


def haversine_path_length(latitudes: np.ndarray, longitudes: np.ndarray) -> float:
    """
    Sum of great-circle distances between consecutive points, in metres.

    Vectorised Haversine over the whole fix sequence.
    """
    if len(latitudes) < 2:
        return 0.0

    lat = np.radians(latitudes)
    lon = np.radians(longitudes)
    delta_lat = np.diff(lat)
    delta_lon = np.diff(lon)

    a = (
        np.sin(delta_lat / 2) ** 2 +
        np.cos(lat[:-1]) * np.cos(lat[1:]) *
        np.sin(delta_lon / 2) ** 2
    )
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return float(np.sum(EARTH_RADIUS_M * c))


@dataclass
class ParsedTrack:
    """
    Metadata extracted from one IGC file.

    Header values default to empty strings when the logger did
    not record them.
    """
    recorded_date: Optional[datetime] = None
    pilot: str = ''
    glider_type: str = ''
    glider_id: str = ''
    points: List[Tuple[float, float]] = field(default_factory=list)

    def total_distance(self) -> float:
        """Track length in metres."""
        if not self.points:
            return 0.0
        coords = np.asarray(self.points, dtype=float)
        return haversine_path_length(coords[:, 0], coords[:, 1])


def _header_text(header: dict, *keys: str) -> str:
    for key in keys:
        value = header.get(key)
        if value:
            return str(value).strip()
    return ''


def _header_date(header: dict) -> Optional[datetime]:
    value = header.get('utc_date')
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return None


def parse_igc_text(text: str) -> ParsedTrack:
    """
    Parse IGC content into a ParsedTrack.

    Raises IGCParseError when the content holds no fix records.
    """
    try:
        result = Reader().read(io.StringIO(text))
    except Exception as e:
        raise IGCParseError(f'Could not parse the IGC data: {e}') from e

    _, header = result.get('header') or ([], {})
    _, fixes = result.get('fix_records') or ([], [])
    header = header or {}
    fixes = fixes or []

    points = [
        (fix['lat'], fix['lon'])
        for fix in fixes
        if fix.get('lat') is not None and fix.get('lon') is not None
    ]
    if not points:
        raise IGCParseError('Could not parse the IGC data: no fix records found')

    return ParsedTrack(
        recorded_date=_header_date(header),
        pilot=_header_text(header, 'pilot'),
        glider_type=_header_text(header, 'glider_model', 'glider_type'),
        glider_id=_header_text(header, 'glider_registration', 'glider_id'),
        points=points,
    )


class IGCParser:
    """
    Fetches IGC files from a URL and parses them.

    Uses a shared requests.Session; every download is bounded
    by timeout_seconds.
    """

    def __init__(self, timeout_seconds: float = 10.0, session: Optional[requests.Session] = None):
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def parse(self, url: str) -> ParsedTrack:
        """
        Download and parse the IGC file at url.

        Raises IGCParseError on network errors, non-2xx responses
        or content that is not an IGC file.
        """
        logger.debug(f'Fetching IGC file: {url}')

        try:
            response = self.session.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning(f'IGC download failed for {url}: {e}')
            raise IGCParseError(f'Bad url, could not fetch the IGC data: {e}') from e

        parsed = parse_igc_text(response.text)
        logger.info(f'Parsed IGC file {url}: {len(parsed.points)} fixes')
        return parsed
