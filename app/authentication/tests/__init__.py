"""
Tests for authentication app.

This package contains test modules for:
- test_services.py: CredentialVerifier and AccountService tests
- test_backends.py: DRF authentication class tests
- test_views.py: API endpoint tests

Usage:
    pytest app/authentication/tests/
    pytest app/authentication/tests/test_services.py
"""
