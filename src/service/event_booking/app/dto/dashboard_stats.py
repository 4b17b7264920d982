import attrs


@attrs.define(frozen=True)
class DashboardStats:
    total_events: int
    upcoming_events: int
    total_users: int
    total_bookings: int
    confirmed_bookings: int
    cancelled_bookings: int
    total_revenue: int
    seats_sold: int
