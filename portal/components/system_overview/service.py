"""
System Overview Service
"""
from portal.core import portal_logs, store


class SystemOverviewService:
    """Service for System Overview component"""

    def __init__(self, monitor=None):
        self.monitor = monitor

    def get_status(self):
        """Remote API health plus portal-side counters"""
        if self.monitor is not None:
            api = self.monitor.snapshot()
        else:
            api = {'status': 'unknown', 'url': None, 'error': None, 'last_check': None, 'uptime_seconds': 0}

        errors = sum(1 for entry in portal_logs if entry.get('level') in ('ERROR', 'CRITICAL'))
        return {
            'api': api,
            'active_sessions': store.session_count(),
            'logs_count': len(portal_logs),
            'errors_count': errors,
        }

    def check_now(self):
        """Run a health check immediately instead of waiting for the monitor tick"""
        if self.monitor is None:
            return self.get_status()
        self.monitor.check()
        return self.get_status()
