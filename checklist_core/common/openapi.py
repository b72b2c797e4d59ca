# backend/checklist_core/common/openapi.py
from __future__ import annotations

from drf_spectacular.openapi import AutoSchema
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter


class ChecklistAutoSchema(AutoSchema):
    """
    Adds the optional hospital_id override to every hospital-scoped endpoint.

    Identity endpoints (auth, me, users) and the schema views are unscoped.
    """

    HOSPITAL_PARAM = OpenApiParameter(
        name="hospital_id",
        type=OpenApiTypes.UUID,
        location=OpenApiParameter.QUERY,
        required=False,
        description=(
            "Hospital to operate on. Admins may pick any hospital; other users may only "
            "pass their own. Defaults to the caller's hospital."
        ),
    )

    UNSCOPED_MODULE_PREFIXES = ("checklist_core.iam.api.", "drf_spectacular.")

    def _is_unscoped_endpoint(self) -> bool:
        view = getattr(self, "view", None)
        if view is None:
            return True
        module = view.__class__.__module__ or ""
        return module.startswith(self.UNSCOPED_MODULE_PREFIXES)

    def get_override_parameters(self):
        params = list(super().get_override_parameters() or [])
        if self._is_unscoped_endpoint():
            return params
        if not any(getattr(p, "name", "") == "hospital_id" for p in params):
            params.append(self.HOSPITAL_PARAM)
        return params
