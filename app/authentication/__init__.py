"""
Authentication application.

Key components:
    - User model: Email-based user with marketplace role fields
    - CredentialVerifier: Token verification shared by REST and realtime
    - AccountService: Credential changes and cascading account deletion
"""
