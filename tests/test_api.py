from unittest.mock import AsyncMock

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.exc import OperationalError

from src.database.sessions import get_async_session
from src.main import app
from src.properties.crud import property_crud
from src.users.dependencies import get_current_user
from tests.factories import make_property, make_user, property_payload


async def override_session():
    yield None


@pytest.fixture
def client(use_cache):  # noqa
    app.dependency_overrides[get_async_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client):  # noqa
    user = make_user()
    app.dependency_overrides[get_current_user] = lambda: user
    return client


def test_search_requires_token(client):
    response = client.get('/api/properties/')

    assert response.status_code == 401
    assert response.json()['code'] == 401
    assert response.headers['WWW-Authenticate'] == 'Bearer'


def test_invalid_token_rejected(client):
    response = client.get(
        '/api/properties/',
        headers={'Authorization': 'Bearer not-a-token'},
    )

    assert response.status_code == 401


def test_search_response_shape(auth_client, monkeypatch):
    items = [make_property(listing_id=f'P{i}') for i in range(5)]
    monkeypatch.setattr(
        property_crud,
        'search',
        AsyncMock(return_value=(items, 25)),
    )

    response = auth_client.get(
        '/api/properties/',
        params={'cities': 'Pune', 'page': '3'},
    )

    assert response.status_code == 200
    body = response.json()
    assert body['maxPaginatedPages'] == 3
    assert [p['id'] for p in body['properties']] == [f'P{i}' for i in range(5)]
    assert 'areaSqFt' in body['properties'][0]


def test_search_invalid_date(auth_client):
    response = auth_client.get(
        '/api/properties/',
        params={'availableFrom': 'tomorrow'},
    )

    assert response.status_code == 400
    assert response.json()['code'] == 400


def test_create_rejects_out_of_range_rating(auth_client):
    response = auth_client.post(
        '/api/properties/',
        json=property_payload(rating=5.1),
    )

    assert response.status_code == 422
    assert 'rating' in response.json()['message']


def test_create_rejects_malformed_json(auth_client):
    response = auth_client.post(
        '/api/properties/',
        content='{"id": ',
        headers={'Content-Type': 'application/json'},
    )

    assert response.status_code == 400


def test_get_property_is_public(client, monkeypatch):
    monkeypatch.setattr(
        property_crud,
        'get_by_listing_id',
        AsyncMock(return_value=make_property()),
    )

    response = client.get('/api/properties/PROP1001')

    assert response.status_code == 200
    assert response.json()['data']['id'] == 'PROP1001'


def test_get_missing_property(client, monkeypatch):
    monkeypatch.setattr(
        property_crud,
        'get_by_listing_id',
        AsyncMock(return_value=None),
    )

    response = client.get('/api/properties/absent')

    assert response.status_code == 404
    assert response.json() == {'code': 404, 'message': 'Property not found'}


def test_store_failure_is_generic_500(client, monkeypatch):
    monkeypatch.setattr(
        property_crud,
        'get_by_listing_id',
        AsyncMock(side_effect=OperationalError('select', {}, Exception('x'))),
    )

    response = client.get('/api/properties/PROP1001')

    assert response.status_code == 500
    assert response.json() == {
        'code': 500,
        'message': 'Internal server error',
    }
