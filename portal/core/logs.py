"""
In-memory log buffer behind the admin log viewer
"""
import logging
from datetime import datetime


class RingBufferHandler(logging.Handler):
    """Logging handler that appends records to a bounded deque"""

    def __init__(self, buffer, level=logging.INFO):
        super().__init__(level)
        self.buffer = buffer

    def emit(self, record):
        try:
            self.buffer.append({
                'timestamp': datetime.fromtimestamp(record.created).isoformat(),
                'level': record.levelname,
                'logger': record.name,
                'message': record.getMessage(),
            })
        except Exception:
            self.handleError(record)


def install_ring_buffer(buffer, logger_name='portal', level=logging.INFO):
    """Attach a single RingBufferHandler to the portal logger"""
    logger = logging.getLogger(logger_name)
    for handler in logger.handlers:
        if isinstance(handler, RingBufferHandler) and handler.buffer is buffer:
            return handler
    handler = RingBufferHandler(buffer, level=level)
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    return handler


def filter_logs(entries, level_filter='ALL', limit=50):
    """Most recent entries, optionally restricted to one level"""
    logs = list(entries)
    if level_filter and level_filter != 'ALL':
        logs = [log for log in logs if log.get('level') == level_filter]
    if limit and len(logs) > limit:
        logs = logs[-limit:]
    return logs
