"""
DRF authentication backed by the shared credential verifier.

Configured as the primary entry of REST_FRAMEWORK
["DEFAULT_AUTHENTICATION_CLASSES"]. Header parsing is inherited from
simplejwt's JWTAuthentication; token and user validation are delegated to
CredentialVerifier so REST requests and realtime sends apply the same rules.
"""

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication

from authentication.services import CredentialVerifier
from core.exceptions import AuthenticationError


class VerifiedJWTAuthentication(JWTAuthentication):
    """Bearer token authentication using CredentialVerifier."""

    def authenticate(self, request):
        header = self.get_header(request)
        if header is None:
            return None

        raw_token = self.get_raw_token(header)
        if raw_token is None:
            return None

        try:
            credential = CredentialVerifier.verify(raw_token)
        except AuthenticationError as exc:
            raise AuthenticationFailed(exc.message, code=exc.error_code) from exc

        return credential.user, credential.token
