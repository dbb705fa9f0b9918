"""
Tests for notifications app.

This package contains test modules for:
- test_services.py: NotificationDispatcher tests
- test_tasks.py: Rendering and email delivery task tests

Usage:
    pytest app/notifications/tests/
"""
