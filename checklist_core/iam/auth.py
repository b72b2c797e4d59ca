# backend/checklist_core/iam/auth.py

from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication

from checklist_core.iam.caller import attach_caller


class CookieOrHeaderJWTAuthentication(JWTAuthentication):
    """
    Bearer header first, then the HttpOnly access cookie set by auth/login/.

    A successful authentication also fills request.caller (role + assigned
    hospital) for the hospital resolver.
    """

    def _raw_token(self, request):
        header = self.get_header(request)
        if header is not None:
            # malformed or foreign header -> None, same as the stock class
            return self.get_raw_token(header)
        cookie_name = settings.SIMPLE_JWT.get("AUTH_COOKIE", "checklist_access")
        return request.COOKIES.get(cookie_name) or None

    def authenticate(self, request):
        raw_token = self._raw_token(request)
        if raw_token is None:
            return None

        validated_token = self.get_validated_token(raw_token)
        user = self.get_user(validated_token)
        attach_caller(request, user=user)
        return user, validated_token
