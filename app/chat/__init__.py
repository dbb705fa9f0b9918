"""
Chat app for one-to-one messaging between users.

This app handles:
- Chat creation gated on HR capability
- Message posting, history and chat previews
- The realtime channel and its WebSocket consumer

Related apps:
    - authentication: User model and credential verification
    - companies: HR capability (company creator or HR member)

WebSocket Support:
    Uses Django Channels for real-time communication.
    See consumers.py for the consumer and realtime.py for broadcasts.

Usage:
    from chat.services import ChatService

    result = ChatService.create_or_get_chat(actor=hr_user, counterparty_id=42)
    if result.success:
        ChatService.post_message(
            actor=hr_user, chat_id=result.data.chat.pk, body="Hello!"
        )
"""
