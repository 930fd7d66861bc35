import json
import logging
import types

import httpx
import pytest

from fleet_providers import settings
from fleet_providers.config import get_provider_config


@pytest.fixture(autouse=True)
def clear_provider_config_cache():
    """Merged provider configs are cached, so reset them around each test"""
    get_provider_config.cache_clear()
    yield
    get_provider_config.cache_clear()


@pytest.fixture
def local_settings(monkeypatch):
    """Install an in-memory local settings module and return it"""
    module = types.ModuleType('fleet_providers.settings.local')
    monkeypatch.setattr(settings, 'local_config', module)
    return module


@pytest.fixture
def valid_stops():
    return [
        {
            'name': 'Depot',
            'notes': 'Load pallets',
            'address': '1 Warehouse Way, Springfield',
            'latitude': 39.7817,
            'longitude': -89.6501,
            'scheduled_departure_time': '2026-10-20T08:00:00Z',
            'scheduled_arrival_time': '2026-10-20T07:45:00Z',
        },
        {
            'name': 'Customer A',
            'notes': '',
            'address': '200 Main St, Springfield',
            'latitude': 39.8,
            'longitude': -89.64,
            'scheduled_departure_time': '2026-10-20T09:15:00Z',
            'scheduled_arrival_time': '2026-10-20T09:00:00Z',
        },
        {
            'name': 'Customer B',
            'notes': 'Ring twice',
            'address': '35 Elm Ave, Chatham',
            'latitude': 39.67,
            'longitude': -89.70,
            'scheduled_arrival_time': '2026-10-20T10:30:00Z',
        },
    ]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was asked to send"""

    def __init__(self, handler):
        self.requests = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def sent_json(self, index: int = -1):
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_transport():
    """Build a RecordingTransport from a status code and JSON body, or a handler"""
    def factory(status_code=201, body=None, handler=None):
        if handler is None:
            payload = {'data': {'id': 'route-123'}} if body is None else body

            def handler(request):
                return httpx.Response(status_code, json=payload)

        return RecordingTransport(handler)

    return factory


@pytest.fixture
def samsara_log(caplog):
    """Capture the samsara logger, which does not propagate to root"""
    logger = logging.getLogger('samsara')
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger='samsara')
    yield caplog
    logger.removeHandler(caplog.handler)
