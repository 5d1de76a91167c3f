"""
System Logs Service
"""
from portal.core import portal_logs
from portal.core.logs import filter_logs

LEVELS = ('ALL', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class SystemLogsService:
    """Service for System Logs component"""

    def get_logs(self, level_filter='ALL', limit=50):
        """Get portal logs with filtering"""
        level_filter = (level_filter or 'ALL').upper()
        if level_filter not in LEVELS:
            raise ValueError(f'Unknown level: {level_filter}')
        return filter_logs(portal_logs, level_filter=level_filter, limit=limit)
