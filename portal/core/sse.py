"""
Fixed-interval polling exposed as a Server-Sent Events stream
"""
import json
import logging
import time

from flask import Response

from .api_client import ApiException

logger = logging.getLogger(__name__)


def sse_event(data, event=None):
    lines = []
    if event:
        lines.append(f'event: {event}')
    lines.append(f'data: {json.dumps(data)}')
    return '\n'.join(lines) + '\n\n'


class PollingStream:
    """Re-run `fetch` every `interval` seconds and push the result when it changes

    No backoff: a failing backend is polled at the same rate. A slow fetch simply
    delays the next tick. The stream stops when the client goes away (the WSGI
    server closes the generator) or after `max_ticks` ticks.
    """

    def __init__(self, interval, heartbeat=30.0, sleep=time.sleep, clock=time.monotonic):
        self.interval = interval
        self.heartbeat = heartbeat
        self._sleep = sleep
        self._clock = clock

    def events(self, fetch, extract=None, max_ticks=None):
        last_state = None
        last_beat = self._clock()
        tick = 0

        while max_ticks is None or tick < max_ticks:
            tick += 1
            try:
                result = fetch()
                state = extract(result) if extract else result
                if state != last_state:
                    yield sse_event(state)
                    last_state = state
            except ApiException as e:
                error_state = {'error': e.message, 'status': e.status}
                if error_state != last_state:
                    logger.warning(f'[SSE] poll failed: {e.message}')
                    yield sse_event(error_state, event='error')
                    last_state = error_state

            if self._clock() - last_beat >= self.heartbeat:
                yield ': heartbeat\n\n'
                last_beat = self._clock()

            if max_ticks is None or tick < max_ticks:
                self._sleep(self.interval)

    def response(self, fetch, extract=None):
        return Response(
            self.events(fetch, extract),
            mimetype='text/event-stream',
            headers={
                'Cache-Control': 'no-cache',
                'X-Accel-Buffering': 'no',
            },
        )
