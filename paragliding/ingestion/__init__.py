"""
Track ingestion for the Paragliding API.

Handles downloading submitted IGC files and extracting the metadata
that gets stored.
"""

from paragliding.ingestion.igc_parser import IGCParser, ParsedTrack, parse_igc_text

__all__ = ['IGCParser', 'ParsedTrack', 'parse_igc_text']
