"""
Core services shared by the portal components
"""
from collections import deque

from portal.config.settings import PortalConfig

from .store import Store

# Global state - shared across all components
store = Store(ttl=PortalConfig.PERMANENT_SESSION_LIFETIME.total_seconds())
portal_logs = deque(maxlen=PortalConfig.MAX_LOG_ENTRIES)
upstream_status = {}

__all__ = [
    'store',
    'portal_logs',
    'upstream_status',
]
