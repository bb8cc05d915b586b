# ============================================
# tracker/authentication.py
# ============================================
"""
Caller identity for the tracker API.

Identity is owned by the gateway in front of this service: it authenticates
the user and forwards the user's UUID in ``X-User-Id``. When
``TRACKER_GATEWAY_TOKEN`` is set the gateway must also send it in
``X-Gateway-Token``.
"""
import hmac
import uuid
from dataclasses import dataclass

from django.conf import settings
from drf_spectacular.extensions import OpenApiAuthenticationExtension
from rest_framework import authentication, exceptions


@dataclass(frozen=True)
class GatewayUser:
    id: uuid.UUID

    is_authenticated = True
    is_anonymous = False

    def __str__(self):
        return str(self.id)


class GatewayUserAuthentication(authentication.BaseAuthentication):

    def authenticate(self, request):
        raw_user_id = request.META.get('HTTP_X_USER_ID')
        if not raw_user_id:
            return None

        expected = getattr(settings, 'TRACKER_GATEWAY_TOKEN', '')
        if expected:
            token = request.META.get('HTTP_X_GATEWAY_TOKEN', '')
            if not hmac.compare_digest(token.encode(), expected.encode()):
                raise exceptions.AuthenticationFailed('Invalid gateway token')

        try:
            user_id = uuid.UUID(raw_user_id.strip())
        except ValueError:
            raise exceptions.AuthenticationFailed('Invalid user id')

        return GatewayUser(id=user_id), None

    def authenticate_header(self, request):
        return 'X-User-Id'


class GatewayUserScheme(OpenApiAuthenticationExtension):
    target_class = 'tracker.authentication.GatewayUserAuthentication'
    name = 'GatewayUser'

    def get_security_definition(self, auto_schema):
        return {'type': 'apiKey', 'in': 'header', 'name': 'X-User-Id'}
