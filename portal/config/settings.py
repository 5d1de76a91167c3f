"""
Portal configuration settings
"""
import os
from datetime import timedelta


class PortalConfig:
    """Centralized configuration for the marketplace portal"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'change-this-secret-key-in-production')
    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)
    SESSION_COOKIE_HTTPONLY = True
    TESTING = False

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_DEFAULT = "100 per minute"

    # Remote API
    API_BASE_URL = os.environ.get('API_BASE_URL', 'http://localhost:8000/api').rstrip('/')
    API_HEALTH_URL = os.environ.get('API_HEALTH_URL', API_BASE_URL + '/health')
    API_TIMEOUT = float(os.environ.get('API_TIMEOUT', '10'))
    STORAGE_BASE_URL = os.environ.get('STORAGE_BASE_URL', '')

    # External collaborators
    NOMINATIM_URL = os.environ.get('NOMINATIM_URL', 'https://nominatim.openstreetmap.org/search')
    NOMINATIM_USER_AGENT = os.environ.get('NOMINATIM_USER_AGENT', 'marketplace-portal/1.0')
    STRIPE_PUBLISHABLE_KEY = os.environ.get('STRIPE_PUBLISHABLE_KEY', '')

    # Monitoring
    ENABLE_UPSTREAM_MONITOR = True
    POLLING_INTERVALS = {
        'messages': 5000,        # Open conversation refresh
        'notifications': 30000,  # Unread badge
        'upstream': 15000,       # Remote API health
        'sse_heartbeat': 30000,
    }

    # UI settings
    APP_NAME = 'NP Admin'
    CURRENCY = 'AED'
    DEFAULT_PAGE_SIZE = 10
    PAGE_SIZE_OPTIONS = [10, 20, 50, 100]
    SEARCH_DEBOUNCE_MS = 300
    LOCATION_DEBOUNCE_MS = 500
    MAX_LOG_ENTRIES = 1000
    NOTIFICATION_LIMIT = 10

    # Input hygiene
    MIN_PASSWORD_LENGTH = 6
    MAX_IMAGE_BYTES = 2 * 1024 * 1024
    ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png', 'image/jpg', 'image/gif', 'image/webp')

    # Landing page per role
    ROLE_HOMES = {
        'admin': '/admin',
        'super_admin': '/admin',
        'vendor': '/vendor',
        'customer': '/customer',
        'technician': '/technician',
    }

    @classmethod
    def polling_seconds(cls, name):
        """Get a polling interval in seconds"""
        return cls.POLLING_INTERVALS.get(name, 5000) / 1000.0


class TestingConfig(PortalConfig):
    """Configuration used by the test-suite"""

    TESTING = True
    SECRET_KEY = 'testing'
    API_BASE_URL = 'http://api.test/api'
    API_HEALTH_URL = 'http://api.test/api/health'
    RATELIMIT_ENABLED = False
    ENABLE_UPSTREAM_MONITOR = False
    SEARCH_DEBOUNCE_MS = 0
    LOCATION_DEBOUNCE_MS = 0
