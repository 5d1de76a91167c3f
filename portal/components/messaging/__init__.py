"""
Messaging Component
Chat panel endpoints and the polling stream for an open conversation
"""
from .routes import messaging_bp, init_messaging
from .service import MessagingService

__all__ = ['messaging_bp', 'init_messaging', 'MessagingService']
