import json

from portal.core.api_client import ApiException
from portal.core.sse import PollingStream, sse_event


def _stream(**kwargs):
    sleeps = []
    stream = PollingStream(interval=5, sleep=sleeps.append, clock=lambda: 0, **kwargs)
    return stream, sleeps


def test_emits_only_when_state_changes():
    results = iter([{'count': 1}, {'count': 1}, {'count': 2}, {'count': 2}])
    stream, sleeps = _stream()

    events = list(stream.events(lambda: next(results), max_ticks=4))

    assert events == [sse_event({'count': 1}), sse_event({'count': 2})]
    assert sleeps == [5, 5, 5]


def test_extract_reduces_payload_before_comparison():
    bodies = iter([{'data': {'unread_count': 3, 'at': 1}}, {'data': {'unread_count': 3, 'at': 2}}])
    stream, _ = _stream()

    events = list(stream.events(lambda: next(bodies),
                                extract=lambda body: body['data']['unread_count'], max_ticks=2))

    assert events == ['data: 3\n\n']


def test_api_error_becomes_error_event_and_recovers():
    def fetch():
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    outcomes = [ApiException('Backend not available', 503),
                ApiException('Backend not available', 503),
                {'count': 1}]
    stream, _ = _stream()

    events = list(stream.events(fetch, max_ticks=3))

    assert len(events) == 2
    assert events[0].startswith('event: error\n')
    assert json.loads(events[0].split('data: ')[1]) == {'error': 'Backend not available', 'status': 503}
    assert events[1] == sse_event({'count': 1})


def test_heartbeat_comment_after_interval():
    ticks = iter([0, 0, 31, 31, 31, 31])
    stream = PollingStream(interval=5, heartbeat=30, sleep=lambda _: None, clock=lambda: next(ticks))

    events = list(stream.events(lambda: {'same': True}, max_ticks=2))

    assert ': heartbeat\n\n' in events


def test_response_headers(app):
    stream, _ = _stream()
    with app.test_request_context():
        response = stream.response(lambda: {}, None)
    assert response.mimetype == 'text/event-stream'
    assert response.headers['Cache-Control'] == 'no-cache'
