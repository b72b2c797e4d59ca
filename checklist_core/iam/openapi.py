from django.conf import settings
from drf_spectacular.extensions import OpenApiAuthenticationExtension


class ChecklistJWTScheme(OpenApiAuthenticationExtension):
    target_class = "checklist_core.iam.auth.CookieOrHeaderJWTAuthentication"
    name = "BearerOrCookieJWT"

    def get_security_definition(self, auto_schema):
        cookie = settings.SIMPLE_JWT.get("AUTH_COOKIE", "checklist_access")
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": f"Access token from auth/login/. Browsers send it as the `{cookie}` cookie.",
        }
