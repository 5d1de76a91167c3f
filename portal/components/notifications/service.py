"""
Notifications Service
"""
from portal.core.api_client import current_client


def unread_state(body):
    return {'unread_count': (body or {}).get('unread_count', 0)}


class NotificationsService:
    """Service for the notifications component"""

    def unread(self, limit=10):
        return current_client().get('/notifications', params={'limit': limit})

    def list_all(self, limit=50):
        return current_client().get('/notifications/all', params={'limit': limit})

    def unread_count(self, client=None):
        return (client or current_client()).get('/notifications/unread-count')

    def mark_read(self, notification_id):
        return current_client().post(f'/notifications/{notification_id}/read')

    def mark_all_read(self):
        return current_client().post('/notifications/mark-all-read')
