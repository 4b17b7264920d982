# API Route Constants

# Base API
API_BASE = '/api'

# Auth routes
AUTH_BASE = f'{API_BASE}/auth'
AUTH_REGISTER = f'{AUTH_BASE}/register'
AUTH_LOGIN = f'{AUTH_BASE}/login'
AUTH_LOGOUT = f'{AUTH_BASE}/logout'
AUTH_PROFILE = f'{AUTH_BASE}/profile'

# Event routes
EVENT_BASE = f'{API_BASE}/events'
EVENT_CREATE = EVENT_BASE
EVENT_LIST = EVENT_BASE
EVENT_GET = f'{EVENT_BASE}/{{event_id}}'
EVENT_UPDATE = f'{EVENT_BASE}/{{event_id}}'
EVENT_DELETE = f'{EVENT_BASE}/{{event_id}}'
EVENT_CATEGORIES = f'{EVENT_BASE}/categories'
EVENT_LOCATIONS = f'{EVENT_BASE}/locations'
EVENT_BOOKINGS = f'{EVENT_BASE}/{{event_id}}/bookings'

# Booking routes
BOOKING_BASE = f'{API_BASE}/bookings'
BOOKING_CREATE = BOOKING_BASE
BOOKING_LIST = BOOKING_BASE
BOOKING_GET = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_CANCEL = f'{BOOKING_BASE}/{{booking_id}}/cancel'
BOOKING_DELETE = f'{BOOKING_BASE}/{{booking_id}}'

# Admin routes
ADMIN_BASE = f'{API_BASE}/admin'
ADMIN_BOOKINGS = f'{ADMIN_BASE}/bookings'
ADMIN_STATS = f'{ADMIN_BASE}/stats'
