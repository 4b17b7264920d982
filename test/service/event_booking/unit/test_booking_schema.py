import pytest

from src.service.event_booking.app.dto.booking_view import BookingWithEvent, UserSummary
from src.service.event_booking.driving_adapter.http_controller.schema.booking_schema import (
    AdminBookingResponse,
    BookingResponse,
    BookingWithEventResponse,
)
from test.service.event_booking.unit.helpers import TEST_USER_ID, make_booking


@pytest.mark.unit
class TestBookingSchema:
    def test_booking_response_keeps_openapi_example(self) -> None:
        schema = BookingResponse.model_json_schema()

        assert schema['example']['status'] == 'confirmed'
        assert schema['example']['seats_booked'] == 2

    def test_admin_booking_carries_user_summary(self) -> None:
        item = BookingWithEvent(
            booking=make_booking(),
            user=UserSummary(id=TEST_USER_ID, name='Alice', email='alice@test.com'),
        )

        response = AdminBookingResponse.from_dto(item)

        assert response.user is not None
        assert response.user.model_dump() == {
            'id': TEST_USER_ID,
            'name': 'Alice',
            'email': 'alice@test.com',
        }
        assert response.event is None
        assert response.user_id == TEST_USER_ID

    def test_user_listing_does_not_expose_user_summary(self) -> None:
        item = BookingWithEvent(
            booking=make_booking(),
            user=UserSummary(id=TEST_USER_ID, name='Alice', email='alice@test.com'),
        )

        assert 'user' not in BookingWithEventResponse.from_dto(item).model_dump()
