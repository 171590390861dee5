# API Route Constants

# Base API
API_BASE = '/api'

# Booking routes
BOOKING_BASE = f'{API_BASE}/booking'
BOOKING_SEARCH = f'{BOOKING_BASE}/search'
BOOKING_CREATE = BOOKING_BASE
BOOKING_LIST = BOOKING_BASE
BOOKING_GET = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_GET_BY_CODE = f'{BOOKING_BASE}/code/{{reservation_code}}'
BOOKING_UPDATE = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_CANCEL = f'{BOOKING_BASE}/{{booking_id}}'

# Admin routes
ADMIN_BASE = f'{API_BASE}/admin'
ADMIN_TRAIN_CREATE = f'{ADMIN_BASE}/train'
ADMIN_SCHEDULE_CREATE = f'{ADMIN_BASE}/schedule'
ADMIN_SCHEDULE_LIST = f'{ADMIN_BASE}/schedule'
ADMIN_SCHEDULE_GET = f'{ADMIN_BASE}/schedule/{{schedule_id}}'
ADMIN_STATION_LIST = f'{ADMIN_BASE}/station'

# System routes
HEALTH = '/health'
