"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Chat, Message model tests
- test_authorization.py: Authorization policy and decorator tests
- test_services.py: ChatService tests, including the end-to-end flow
- test_realtime.py: RealtimeChannel broadcast tests
- test_middleware.py: WebSocket token middleware tests
- test_consumers.py: WebSocket consumer tests
- test_views.py: REST API endpoint tests

Usage:
    pytest app/chat/tests/
    pytest app/chat/tests/test_consumers.py
"""
