#!/usr/bin/env python3
"""
Tests for the per-user endpoints: saved data, favorites and usage,
plus the tool catalogue and health check
"""

import copy
import json

from devtools_hub.config.settings import DEFAULT_CONFIG
from devtools_hub.config.tools import TOOLS
from devtools_hub.main import create_app


def post(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type='application/json')


class TestSavedDataEndpoints:

    def _save(self, client, title='My JSON', tool_id='json-formatter', user_id='alice'):
        return post(client, '/api/saved-data', {
            'user_id': user_id,
            'tool_id': tool_id,
            'title': title,
            'content': {'a': 1},
            'description': 'desc'
        })

    def test_save_and_fetch(self, client):
        response = self._save(client)
        assert response.status_code == 200
        entry_id = response.get_json()['entry_id']

        listing = client.get('/api/saved-data/alice').get_json()
        assert listing['count'] == 1
        assert listing['data'][0]['title'] == 'My JSON'

        entry = client.get(f'/api/saved-data/alice/{entry_id}').get_json()
        assert entry['content'] == {'a': 1}
        assert entry['description'] == 'desc'

    def test_filter_by_tool_and_limit(self, client):
        self._save(client, 'one')
        self._save(client, 'two', tool_id='sql-formatter')
        self._save(client, 'three')

        by_tool = client.get('/api/saved-data/alice?tool_id=json-formatter').get_json()
        assert [e['title'] for e in by_tool['data']] == ['three', 'one']

        limited = client.get('/api/saved-data/alice?limit=1').get_json()
        assert limited['count'] == 1

    def test_configured_limit_drops_oldest(self, client):
        for title in ['a', 'b', 'c', 'd']:
            self._save(client, title)
        titles = [e['title'] for e in client.get('/api/saved-data/alice').get_json()['data']]
        assert titles == ['d', 'c', 'b']

    def test_delete(self, client):
        entry_id = self._save(client).get_json()['entry_id']
        assert client.delete(f'/api/saved-data/alice/{entry_id}').status_code == 200
        assert client.delete(f'/api/saved-data/alice/{entry_id}').status_code == 404
        assert client.get(f'/api/saved-data/alice/{entry_id}').status_code == 404

    def test_other_user_cannot_read_or_delete(self, client):
        entry_id = self._save(client).get_json()['entry_id']
        assert client.get(f'/api/saved-data/bob/{entry_id}').status_code == 404
        assert client.delete(f'/api/saved-data/bob/{entry_id}').status_code == 404
        assert client.get('/api/saved-data/bob').get_json()['count'] == 0

    def test_validation(self, client):
        assert post(client, '/api/saved-data', {'tool_id': 'x', 'title': 't', 'content': 'c'}).status_code == 400
        assert self._save(client, tool_id='bad tool').status_code == 400
        assert self._save(client, title='  ').status_code == 400
        response = post(client, '/api/saved-data', {'user_id': 'u', 'tool_id': 't', 'title': 'x'})
        assert response.get_json()['error'] == 'Missing content'

    def test_invalid_tool_filter(self, client):
        assert client.get('/api/saved-data/alice?tool_id=bad%20tool').status_code == 400


class TestFavoritesEndpoints:

    def test_add_list_remove(self, client):
        body = post(client, '/api/favorites', {'user_id': 'u', 'tool_id': 'hash-generator'}).get_json()
        assert body == {'success': True, 'added': True, 'favorites': ['hash-generator']}

        again = post(client, '/api/favorites', {'user_id': 'u', 'tool_id': 'hash-generator'}).get_json()
        assert again['added'] is False

        assert client.get('/api/favorites/u').get_json()['favorites'] == ['hash-generator']
        assert client.delete('/api/favorites/u/hash-generator').status_code == 200
        assert client.delete('/api/favorites/u/hash-generator').status_code == 404

    def test_limit(self, client):
        for tool_id in ['a', 'b', 'c']:
            post(client, '/api/favorites', {'user_id': 'u', 'tool_id': tool_id})
        response = post(client, '/api/favorites', {'user_id': 'u', 'tool_id': 'd'})
        assert response.status_code == 400
        assert 'Favorites limit reached' in response.get_json()['error']


class TestUsageEndpoints:

    def test_record_and_list(self, client):
        post(client, '/api/tool-usage', {'user_id': 'u', 'tool_id': 'a', 'tool_name': 'Tool A'})
        body = post(client, '/api/tool-usage', {'user_id': 'u', 'tool_id': 'b'}).get_json()
        assert body['usage']['usage_count'] == 1
        post(client, '/api/tool-usage', {'user_id': 'u', 'tool_id': 'b'})

        listing = client.get('/api/tool-usage/u').get_json()
        assert listing['count'] == 2
        assert [c['tool_id'] for c in listing['usage']] == ['b', 'a']

    def test_missing_user(self, client):
        response = post(client, '/api/tool-usage', {'tool_id': 'a'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Missing user_id'


class TestAppEndpoints:

    def test_tools(self, client):
        tools = client.get('/api/tools').get_json()['tools']
        assert len(tools) == len(TOOLS)

    def test_disabled_tool_hidden(self):
        config = copy.deepcopy(DEFAULT_CONFIG)
        config['tools'] = {'password-generator': {'enabled': False}}
        app = create_app(config)

        with app.test_client() as client:
            ids = [t['id'] for t in client.get('/api/tools').get_json()['tools']]
            assert 'password-generator' not in ids
            assert client.get('/health').get_json()['tools_count'] == len(TOOLS) - 1

    def test_health(self, client, store):
        store.add_favorite('u1', 'a')
        store.record_usage('u2', 'a')

        body = client.get('/health').get_json()
        assert body['status'] == 'healthy'
        assert body['users_count'] == 2
        assert body['tools_count'] == len(TOOLS)
