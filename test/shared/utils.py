from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import (
    AUTH_LOGIN,
    AUTH_PROFILE,
    AUTH_REGISTER,
    BOOKING_BASE,
    EVENT_BASE,
)
from test.util_constant import (
    DEFAULT_EVENT_CATEGORY,
    DEFAULT_EVENT_DESCRIPTION,
    DEFAULT_EVENT_LOCATION,
    DEFAULT_EVENT_PRICE,
    DEFAULT_EVENT_TIME,
    DEFAULT_EVENT_TITLE,
    DEFAULT_EVENT_VENUE,
    DEFAULT_TOTAL_SEATS,
    EVENT_FAR_HOURS,
)


def login_user(client: TestClient, email: str, password: str) -> Any:
    """Helper function to login a user and set cookies."""
    login_response = client.post(AUTH_LOGIN, json={'email': email, 'password': password})
    assert login_response.status_code == 200, f'Login failed: {login_response.text}'
    if 'fastapiusersauth' in login_response.cookies:
        client.cookies.set('fastapiusersauth', login_response.cookies['fastapiusersauth'])
    return login_response


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def create_user(
    client: TestClient, email: str, password: str, name: str, role: str
) -> Dict[str, Any]:
    user_data = {'email': email, 'password': password, 'name': name, 'role': role}
    response = client.post(AUTH_REGISTER, json=user_data)
    if response.status_code == 409:  # User already exists
        login_user(client, email, password)
        profile = client.get(AUTH_PROFILE).json()
        client.cookies.clear()
        return profile
    assert_response_status(response, 201, f'Failed to create {role} user')
    return response.json()


def hours_from_now(hours: float) -> datetime:
    return datetime.now(timezone.utc) + timedelta(hours=hours)


def event_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        'title': DEFAULT_EVENT_TITLE,
        'description': DEFAULT_EVENT_DESCRIPTION,
        'category': DEFAULT_EVENT_CATEGORY,
        'location': DEFAULT_EVENT_LOCATION,
        'venue': DEFAULT_EVENT_VENUE,
        'date': hours_from_now(EVENT_FAR_HOURS).isoformat(),
        'time': DEFAULT_EVENT_TIME,
        'price': DEFAULT_EVENT_PRICE,
        'total_seats': DEFAULT_TOTAL_SEATS,
    }
    payload.update(overrides)
    return payload


def create_event(client: TestClient, **overrides: Any) -> Dict[str, Any]:
    """Create an event as the currently logged-in admin."""
    response = client.post(EVENT_BASE, json=event_payload(**overrides))
    assert_response_status(response, 201, 'Failed to create event')
    return response.json()


def get_event(client: TestClient, event_id: int) -> Dict[str, Any]:
    response = client.get(f'{EVENT_BASE}/{event_id}')
    assert_response_status(response, 200)
    return response.json()


def book(client: TestClient, event_id: int, seats: int, **extra: Any) -> Any:
    headers = extra.pop('headers', None)
    return client.post(
        BOOKING_BASE, json={'event_id': event_id, 'seats_booked': seats, **extra}, headers=headers
    )
