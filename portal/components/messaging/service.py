"""
Messaging Service
Conversations and messages through the chat endpoints
"""
import logging

from portal.core.api_client import current_client
from portal.core.validation import ValidationError, clean_text

logger = logging.getLogger(__name__)


def conversation_state(body):
    """Part of a conversation response that the open chat panel renders"""
    conversation = (body or {}).get('data') or {}
    return {
        'conversation_id': conversation.get('id'),
        'messages': conversation.get('messages') or [],
        'unread_count': conversation.get('unread_count', 0),
    }


class MessagingService:
    """Service for the messaging component"""

    def list_conversations(self, page=1):
        return current_client().get_page('/chat/conversations', params={'page': page})

    def start_conversation(self, user_id):
        """Start a conversation with a user, or get the existing one"""
        return current_client().post(f'/chat/conversations/{user_id}')

    def get_conversation(self, conversation_id, client=None):
        """Fetching a conversation also marks its messages read on the server"""
        return (client or current_client()).get(f'/chat/conversations/{conversation_id}')

    def send_message(self, conversation_id, message):
        message = clean_text(message)
        if not message:
            raise ValidationError({'message': ['Message cannot be empty']})
        result = current_client().post(f'/chat/conversations/{conversation_id}/messages', {'message': message})
        logger.info(f'Message sent to conversation {conversation_id}')
        return result

    def mark_read(self, conversation_id):
        return current_client().post(f'/chat/conversations/{conversation_id}/mark-read')

    def unread_count(self):
        return current_client().get('/chat/unread-count')

    def search_users(self, query=''):
        params = {'search': query} if query else None
        return current_client().get('/chat/users/search', params=params)
