"""HTTP-level tests through the Flask test client."""

import pytest

from paragliding.api.tracks import iso8601_duration
from paragliding.services import is_valid_id

TRACK_URL = 'http://example.com/flight.igc'
HOOK_URL = 'http://hooks.example.com/new'


def post_track(client, url=TRACK_URL):
    return client.post('/api/track', json={'url': url})


def register(client, url=HOOK_URL, trigger=None):
    body = {'webhookURL': url}
    if trigger is not None:
        body['minTriggerValue'] = trigger
    return client.post('/api/webhook/new_track/', json=body)


class TestApiInfo:

    def test_root_redirects(self, client):
        response = client.get('/')

        assert response.status_code == 301
        assert response.headers['Location'].endswith('/api')

    def test_info(self, client):
        response = client.get('/api')

        assert response.status_code == 200
        data = response.get_json()
        assert data['info'] == 'Service for Paragliding tracks'
        assert data['version'] == 'v1'
        assert data['uptime'].startswith('P')

    @pytest.mark.parametrize('path', ['/health', '/api/unknown'])
    def test_unrouted_paths_are_json_404(self, client, path):
        response = client.get(path)

        assert response.status_code == 404
        assert response.get_json() == {'error': 'Not found'}

    @pytest.mark.parametrize('seconds, expected', [
        (0, 'PT0S'),
        (59, 'PT59S'),
        (3661, 'PT1H1M1S'),
        (86400, 'P1D'),
        (90061.7, 'P1DT1H1M1S'),
    ])
    def test_iso8601_duration(self, seconds, expected):
        assert iso8601_duration(seconds) == expected


class TestTrackEndpoints:

    def test_empty_list(self, client):
        response = client.get('/api/track')

        assert response.status_code == 200
        assert response.get_json() == []

    def test_submit_and_browse(self, client, parser):
        response = post_track(client)

        assert response.status_code == 200
        assert response.get_json() == {'id': 1}
        assert parser.urls == [TRACK_URL]

        assert client.get('/api/track').get_json() == [1]

        data = client.get('/api/track/1').get_json()
        assert data['pilot'] == 'Miguel Angel Gordillo'
        assert data['glider'] == 'RV8'
        assert data['glider_id'] == 'EC-XLL'
        assert data['track_src_url'] == TRACK_URL
        assert data['track_length'] > 0
        assert 'timestamp' not in data

    def test_field_endpoint(self, client):
        post_track(client)

        pilot = client.get('/api/track/1/pilot')
        assert pilot.status_code == 200
        assert pilot.mimetype == 'text/plain'
        assert pilot.get_data(as_text=True) == 'Miguel Angel Gordillo'

        length = client.get('/api/track/1/track_length').get_data(as_text=True)
        assert len(length.split('.')[1]) == 6

        assert client.get('/api/track/1/H_date').get_data(as_text=True).startswith('2016-02-19')
        assert client.get('/api/track/1/track_src_url').get_data(as_text=True) == TRACK_URL

    def test_unknown_field_or_track(self, client):
        post_track(client)

        assert client.get('/api/track/1/colour').status_code == 404
        assert client.get('/api/track/99').status_code == 404
        assert client.get('/api/track/99/pilot').status_code == 404

    @pytest.mark.parametrize('kwargs', [
        {'data': 'not json', 'content_type': 'application/json'},
        {'json': {'link': TRACK_URL}},
        {'json': {'url': ''}},
        {'json': ['url']},
    ])
    def test_malformed_submission(self, client, kwargs):
        response = client.post('/api/track', **kwargs)

        assert response.status_code == 400
        assert client.get('/api/track').get_json() == []

    def test_unparsable_igc(self, client):
        response = post_track(client, 'http://example.com/bad.igc')

        assert response.status_code == 400
        assert client.get('/admin/api/tracks_count').get_data(as_text=True) == '0'


class TestTickerEndpoints:

    def test_empty_store_is_no_content(self, client):
        assert client.get('/api/ticker/latest').status_code == 204
        assert client.get('/api/ticker/').status_code == 204
        assert client.get('/api/ticker/0').status_code == 204

    def test_pages(self, client):
        for _ in range(7):
            post_track(client)

        page = client.get('/api/ticker/').get_json()
        assert page['tracks'] == [7, 6, 5, 4, 3]
        assert page['t_latest'] == page['t_start']
        assert page['t_stop'] < page['t_start']

        latest = client.get('/api/ticker/latest')
        assert latest.status_code == 200
        assert latest.get_data(as_text=True) == str(page['t_start'])

        assert client.get(f"/api/ticker/{page['t_start']}").status_code == 204

    def test_newer_than(self, client):
        post_track(client)
        first = int(client.get('/api/ticker/latest').get_data(as_text=True))
        post_track(client)
        post_track(client)

        page = client.get(f'/api/ticker/{first}').get_json()

        assert page['tracks'] == [3, 2]
        assert page['t_stop'] > first


class TestWebhookEndpoints:

    def test_register_get_delete(self, client):
        response = register(client, trigger=3)

        assert response.status_code == 201
        webhook_id = response.get_data(as_text=True)
        assert is_valid_id(webhook_id)

        fetched = client.get(f'/api/webhook/new_track/{webhook_id}')
        assert fetched.status_code == 200
        assert fetched.get_json() == {'webhookURL': HOOK_URL, 'minTriggerValue': 3}

        deleted = client.delete(f'/api/webhook/new_track/{webhook_id}')
        assert deleted.status_code == 200
        assert deleted.get_json() == {'webhookURL': HOOK_URL, 'minTriggerValue': 3}

        assert client.get(f'/api/webhook/new_track/{webhook_id}').status_code == 404

    def test_default_trigger(self, client):
        webhook_id = register(client).get_data(as_text=True)

        data = client.get(f'/api/webhook/new_track/{webhook_id}').get_json()

        assert data['minTriggerValue'] == 1

    def test_duplicate_is_conflict(self, client):
        first_id = register(client).get_data(as_text=True)

        assert register(client).status_code == 409
        assert client.get(f'/api/webhook/new_track/{first_id}').status_code == 200

    @pytest.mark.parametrize('body', [None, {}, {'webhookURL': ''}, {'webhookURL': HOOK_URL, 'minTriggerValue': 'x'}])
    def test_malformed_registration(self, client, body):
        if body is None:
            response = client.post('/api/webhook/new_track/', data='{', content_type='application/json')
        else:
            response = client.post('/api/webhook/new_track/', json=body)

        assert response.status_code == 400

    @pytest.mark.parametrize('webhook_id', ['abc', '0' * 24, 'z' * 24])
    def test_unknown_or_malformed_id(self, client, webhook_id):
        assert client.get(f'/api/webhook/new_track/{webhook_id}').status_code == 404
        assert client.delete(f'/api/webhook/new_track/{webhook_id}').status_code == 404

    def test_submission_triggers_notification(self, client, delivery):
        register(client, trigger=2)

        post_track(client)
        assert delivery.calls == []

        post_track(client)

        assert len(delivery.calls) == 1
        url, message = delivery.calls[0]
        assert url == HOOK_URL
        assert '2 new tracks are id2,id1.' in message['content']

    def test_failed_delivery_does_not_fail_submission(self, app_config, parser):
        from paragliding.app import create_app
        from tests.conftest import RecordingDelivery

        app = create_app(app_config, igc_parser=parser, delivery=RecordingDelivery(succeed=False))
        client = app.test_client()
        register(client)

        response = post_track(client)

        assert response.status_code == 200
        assert response.get_json() == {'id': 1}


class TestAdminEndpoints:

    def test_count_and_delete(self, client):
        for _ in range(3):
            post_track(client)

        count = client.get('/admin/api/tracks_count')
        assert count.mimetype == 'text/plain'
        assert count.get_data(as_text=True) == '3'

        deleted = client.delete('/admin/api/tracks')
        assert deleted.get_data(as_text=True) == '3'

        assert client.get('/admin/api/tracks_count').get_data(as_text=True) == '0'
        assert client.get('/api/ticker/').status_code == 204
