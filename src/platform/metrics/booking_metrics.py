from prometheus_client import Counter, Gauge, Histogram


class BookingMetrics:
    """
    Booking transaction metrics collector

    Tracks the outcome and latency of every create/cancel unit of work and the
    seat inventory each one leaves behind.
    """

    def __init__(self):
        # ========== Booking Transaction Metrics ==========
        self.booking_requests = Counter(
            'booking_requests_total',
            'Total booking transactions by outcome',
            ['operation', 'result'],  # operation: create/cancel, result: error kind or success
        )

        self.booking_transaction_duration = Histogram(
            'booking_transaction_duration_seconds',
            'Booking unit of work duration including retries',
            ['operation'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
        )

        self.booking_contention_retries = Counter(
            'booking_contention_retries_total',
            'Units of work retried after lock contention or timeout',
            ['operation'],
        )

        # ========== Seat Inventory Metrics ==========
        self.seats_available = Gauge(
            'event_seats_available',
            'Available seats per event after the last booking transaction',
            ['event_id'],
        )

    # ========== Helper Methods ==========

    def record_booking_transaction(self, *, operation: str, result: str, duration: float):
        self.booking_requests.labels(operation=operation, result=result).inc()
        self.booking_transaction_duration.labels(operation=operation).observe(duration)

    def record_contention_retry(self, *, operation: str):
        self.booking_contention_retries.labels(operation=operation).inc()

    def update_seats_available(self, *, event_id: int, available_seats: int):
        self.seats_available.labels(event_id=str(event_id)).set(available_seats)


# Global metrics instance
metrics = BookingMetrics()
