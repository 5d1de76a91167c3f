"""
Notifications Component
"""
from .routes import notifications_bp, init_notifications
from .service import NotificationsService

__all__ = ['notifications_bp', 'init_notifications', 'NotificationsService']
