"""
Upstream monitoring service
"""
import logging
import threading
from datetime import datetime

import requests

logger = logging.getLogger(__name__)


class UpstreamMonitor:
    """Background health checks of the remote API"""

    def __init__(self, health_url, interval=15.0, timeout=3, status_map=None):
        self.health_url = health_url
        self.interval = interval
        self.timeout = timeout
        self.running = False
        self.thread = None
        self._stop = threading.Event()
        self.status = status_map if status_map is not None else {}
        self.status.setdefault('api', {'status': 'unknown', 'last_check': None, 'since': None, 'error': None})

    def start(self):
        """Start monitoring thread"""
        if self.thread is None or not self.thread.is_alive():
            self.running = True
            self._stop.clear()
            self.thread = threading.Thread(target=self._monitor_loop, name='upstream-monitor', daemon=True)
            self.thread.start()
            logger.info(f'Upstream monitor started for {self.health_url}')

    def stop(self):
        """Stop monitoring thread"""
        self.running = False
        self._stop.set()
        if self.thread:
            self.thread.join(timeout=2)

    def _monitor_loop(self):
        while self.running:
            try:
                self.check()
            except Exception as e:
                logger.error(f'Monitor loop error: {e}')
            self._stop.wait(self.interval)

    def check(self):
        """Check the API once and record the result"""
        status, error = self._check_health()
        entry = self.status['api']
        old_status = entry.get('status', 'unknown')

        if status != old_status:
            log = logger.info if status == 'healthy' else logger.warning
            log(f'API status changed: {old_status} -> {status}')
            entry['since'] = datetime.now()

        entry['status'] = status
        entry['error'] = error
        entry['last_check'] = datetime.now()
        return status

    def _check_health(self):
        try:
            response = requests.get(self.health_url, timeout=self.timeout)
            if response.status_code == 200:
                return 'healthy', None
            return 'unhealthy', f'HTTP {response.status_code}'
        except requests.exceptions.RequestException as e:
            return 'down', str(e)

    def snapshot(self):
        entry = self.status['api']
        since = entry.get('since')
        last_check = entry.get('last_check')
        return {
            'status': entry.get('status', 'unknown'),
            'url': self.health_url,
            'error': entry.get('error'),
            'last_check': last_check.isoformat() if last_check else None,
            'uptime_seconds': int((datetime.now() - since).total_seconds())
            if since and entry.get('status') == 'healthy' else 0,
        }
