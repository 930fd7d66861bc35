"""Integration tests for settings, provider config merging and the provider registry"""

import logging

import httpx
import pytest

from fleet_providers import PROVIDERS, get_provider, post_route, register_provider
from fleet_providers.config import (
    PROVIDER_DEFAULTS,
    deep_update,
    get_provider_config,
    redact,
    register_provider_config,
)
from fleet_providers.settings import get_config, get_required_config, list_config_keys
from fleet_providers.us.samsara import submit_route


def test_local_settings_override_defaults(local_settings):
    local_settings.ENABLED_PROVIDERS = []

    assert get_config('ENABLED_PROVIDERS') == []
    assert get_config('REQUEST_TIMEOUT') == 30.0  # still from default.py
    assert get_config('NOT_A_SETTING', 'fallback') == 'fallback'


def test_required_config_raises_when_missing():
    with pytest.raises(ValueError, match='NOT_A_SETTING'):
        get_required_config('NOT_A_SETTING')


def test_list_config_keys(local_settings):
    local_settings.EXTRA_SETTING = 1
    keys = list_config_keys()
    assert {'ENABLED_PROVIDERS', 'LOGGING_CONFIG', 'PROVIDER_CONFIG', 'EXTRA_SETTING'} <= keys


def test_samsara_defaults_are_registered(local_settings):
    local_settings.PROVIDER_CONFIG = {}
    local_settings.SAMSARA_API_KEY = None

    config = get_provider_config('samsara')

    assert config['API_URL'] == 'https://api.samsara.com/v1/fleet/routes'
    assert config['TIMEOUT'] == 30.0
    assert config['API_KEY'] is None


def test_provider_config_precedence(local_settings):
    """Provider defaults < <PROVIDER>_<KEY> settings < PROVIDER_CONFIG"""
    local_settings.SAMSARA_API_KEY = 'env-key'
    local_settings.SAMSARA_TIMEOUT = 10
    local_settings.PROVIDER_CONFIG = {'samsara': {'TIMEOUT': 5, 'api_url': 'https://staging.example.test/routes'}}

    config = get_provider_config('samsara')

    assert config['API_KEY'] == 'env-key'
    assert config['TIMEOUT'] == 5
    assert config['API_URL'] == 'https://staging.example.test/routes'


def test_deep_update_merges_nested_and_replaces_lists():
    base = {'A': {'x': 1, 'y': [1, 2]}, 'B': 1}
    merged = deep_update(base, {'A': {'y': [3]}, 'c': 2})

    assert merged == {'A': {'x': 1, 'y': [3]}, 'B': 1, 'c': 2}
    assert base == {'A': {'x': 1, 'y': [1, 2]}, 'B': 1}


def test_redact_hides_secrets():
    redacted = redact({'API_KEY': 'secret', 'API_URL': 'https://x', 'nested': {'token': 't'}, 'SECRET': None})
    assert redacted == {'API_KEY': '***', 'API_URL': 'https://x', 'nested': {'token': '***'}, 'SECRET': None}


def test_api_key_never_logged(local_settings, caplog):
    local_settings.SAMSARA_API_KEY = 'very-secret-value'
    config_logger = logging.getLogger('fleet_providers.config')
    config_logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger='fleet_providers.config')
    try:
        assert get_provider_config('samsara')['API_KEY'] == 'very-secret-value'
    finally:
        config_logger.removeHandler(caplog.handler)

    assert caplog.records
    assert all('very-secret-value' not in record.getMessage() for record in caplog.records)


def test_register_new_provider_config():
    register_provider_config('example', {'API_URL': 'https://example.test', 'TIMEOUT': 1})
    try:
        assert get_provider_config('example')['API_URL'] == 'https://example.test'
    finally:
        PROVIDER_DEFAULTS.pop('example')
def test_samsara_provider_is_registered():
    provider = get_provider('samsara')

    assert provider is not None
    assert set(provider.endpoints) == {'routes'}
    assert provider.endpoints['routes'] is submit_route


def test_register_provider_from_dict():
    async def ping():
        return 'pong'

    register_provider('test-provider', {'ping': ping})
    try:
        assert get_provider('test-provider').endpoints['ping'] is ping
    finally:
        PROVIDERS.pop('test-provider')


@pytest.mark.asyncio
async def test_post_route_dispatches_to_provider_endpoint(valid_stops):
    calls = []

    async def create_route(route_name, driver_id, route_notes, stops):
        calls.append((route_name, driver_id, route_notes, stops))
        return 'route-1'

    register_provider('test-provider', {'routes': create_route})
    try:
        route_id = await post_route('Morning run', 'driver-42', '', valid_stops, provider='test-provider')
    finally:
        PROVIDERS.pop('test-provider')

    assert route_id == 'route-1'
    assert calls == [('Morning run', 'driver-42', '', valid_stops)]


@pytest.mark.asyncio
@pytest.mark.parametrize('provider_name', ['unknown', 'no-routes'])
async def test_post_route_rejects_unusable_provider(provider_name, valid_stops):
    register_provider('no-routes', {})
    try:
        with pytest.raises(ValueError, match=provider_name):
            await post_route('Morning run', 'driver-42', '', valid_stops, provider=provider_name)
    finally:
        PROVIDERS.pop('no-routes')


@pytest.mark.asyncio
async def test_post_route_defaults_to_samsara(monkeypatch, local_settings, make_transport, valid_stops):
    local_settings.SAMSARA_API_KEY = 'configured-key'
    local_settings.PROVIDER_CONFIG = {'samsara': {'API_URL': 'https://fleet.example.test/routes'}}

    transport = make_transport(201, {'data': {'id': 'route-55'}})
    real_client = httpx.AsyncClient
    monkeypatch.setattr(httpx, 'AsyncClient', lambda **kwargs: real_client(transport=transport, **kwargs))

    assert await post_route('Morning run', 'driver-42', '', valid_stops) == 'route-55'
    assert str(transport.requests[0].url) == 'https://fleet.example.test/routes'
