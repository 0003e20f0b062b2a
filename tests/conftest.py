"""
Shared fixtures.

Every test gets its own SQLite database file under tmp_path. The IGC
parser and webhook delivery are replaced with in-memory stand-ins so
no test touches the network.
"""

from datetime import datetime

import pytest

from paragliding.app import create_app
from paragliding.config import AppConfig, DatabaseConfig
from paragliding.exceptions import IGCParseError
from paragliding.ingestion import ParsedTrack
from paragliding.models import init_db, make_engine, make_session_factory
from paragliding.services import WebhookDelivery
from paragliding.stores import TrackStore, WebhookStore


class StubParser:
    """Returns a fixed two-fix track; URLs containing 'bad' fail to parse."""

    def __init__(self):
        self.urls = []

    def parse(self, url: str) -> ParsedTrack:
        self.urls.append(url)
        if 'bad' in url:
            raise IGCParseError('Bad url, could not parse the IGC data')
        return ParsedTrack(
            recorded_date=datetime(2016, 2, 19),
            pilot='Miguel Angel Gordillo',
            glider_type='RV8',
            glider_id='EC-XLL',
            points=[(0.0, 0.0), (0.0, 1.0)],
        )


class RecordingDelivery(WebhookDelivery):
    """Records every delivery instead of sending it."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.calls = []

    def deliver(self, url: str, message: dict) -> bool:
        self.calls.append((url, message))
        return self.succeed


def fixed_clock(*values):
    """Clock returning the given nanosecond readings in order."""
    readings = iter(values)
    return lambda: next(readings)


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(database=DatabaseConfig(url=f'sqlite:///{tmp_path / "test.db"}'))


@pytest.fixture
def session_factory(app_config):
    engine = make_engine(app_config.database)
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def track_store(session_factory) -> TrackStore:
    return TrackStore(session_factory)


@pytest.fixture
def webhook_store(session_factory) -> WebhookStore:
    return WebhookStore(session_factory)


@pytest.fixture
def parser() -> StubParser:
    return StubParser()


@pytest.fixture
def delivery() -> RecordingDelivery:
    return RecordingDelivery()


@pytest.fixture
def app(app_config, parser, delivery):
    app = create_app(app_config, igc_parser=parser, delivery=delivery)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def insert_track(store: TrackStore, url: str = 'http://example.com/flight.igc'):
    return store.insert(track_src_url=url, pilot='pilot', glider='glider', glider_id='id', track_length=1.0)
