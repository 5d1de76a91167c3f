"""
Per-session view state
Each list view keeps the last page it fetched so that a successful mutation can
be reflected in place without refetching the list.
"""
import threading
import time


class Slice:
    """Cached copy of one list view"""

    def __init__(self, name):
        self.name = name
        self.query = None
        self.page = None

    def put(self, query, page):
        self.query = query
        self.page = page
        return page

    def get(self):
        return self.page

    def update_item(self, item_id, **changes):
        """Apply a local mutation to one cached row, return the row or None"""
        if self.page is None:
            return None
        item = self.page.find(item_id)
        if item is None:
            return None
        item.update(changes)
        return item

    def remove_item(self, item_id):
        if self.page is None:
            return False
        before = len(self.page.data)
        self.page.data = [item for item in self.page.data if str(item.get('id')) != str(item_id)]
        removed = len(self.page.data) != before
        if removed:
            self.page.meta.total = max(self.page.meta.total - 1, 0)
        return removed

    def clear(self):
        self.query = None
        self.page = None


class Store:
    """Session id -> slice name -> Slice

    Sessions idle for longer than `ttl` seconds are evicted on the next
    access, so caches of users who never log out do not pile up.
    """

    def __init__(self, ttl=None, clock=time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions = {}
        self._last_seen = {}

    def _evict_idle(self, now):
        if not self.ttl:
            return
        for sid in [sid for sid, seen in self._last_seen.items() if now - seen > self.ttl]:
            self._sessions.pop(sid, None)
            del self._last_seen[sid]

    def slice(self, sid, name):
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            self._last_seen[sid] = now
            slices = self._sessions.setdefault(sid, {})
            if name not in slices:
                slices[name] = Slice(name)
            return slices[name]

    def drop_session(self, sid):
        with self._lock:
            self._sessions.pop(sid, None)
            self._last_seen.pop(sid, None)

    def session_count(self):
        with self._lock:
            self._evict_idle(self._clock())
            return len(self._sessions)
