# backend/checklist_core/tasks/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from checklist_core.common.api.listing import optional_uuid, paginate, pk_or_404, query_flag
from checklist_core.common.permissions import CatalogPermission
from checklist_core.iam.caller import get_caller
from checklist_core.iam.scope import read_scope_for_request
from checklist_core.tasks.api.serializers import TaskCreateSerializer, TaskSerializer, TaskUpdateSerializer
from checklist_core.tasks.selectors import task_by_id, task_list
from checklist_core.tasks.services import TaskService, TaskUpdate


@extend_schema_view(
    list=extend_schema(tags=["Tasks"]),
    retrieve=extend_schema(tags=["Tasks"]),
    create=extend_schema(tags=["Tasks"], request=TaskCreateSerializer, responses={201: TaskSerializer}),
    partial_update=extend_schema(tags=["Tasks"], request=TaskUpdateSerializer, responses={200: TaskSerializer}),
    destroy=extend_schema(tags=["Tasks"]),
)
class TaskViewSet(viewsets.ViewSet):
    """
    Thin API layer over the task catalog:
    - hospital scope comes from the tenant resolver
    - reads go through selectors, writes through TaskService
    """

    permission_classes = [CatalogPermission]

    def list(self, request):
        params = request.query_params
        qs = task_list(
            scope=read_scope_for_request(request),
            area_id=optional_uuid(params, "area_id"),
            search=(params.get("search") or "").strip() or None,
            include_inactive=query_flag(params, "include_inactive", default=True),
        )
        return paginate(request, qs, TaskSerializer)

    def retrieve(self, request, pk=None):
        obj = task_by_id(task_id=pk_or_404(pk, "Task"), scope=read_scope_for_request(request))
        return Response(TaskSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        s = TaskCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = TaskService.create(
            area_id=d["area_id"],
            name=d["name"],
            description=d["description"],
            code=d.get("code") or None,
            order=d.get("order", 0),
            is_active=d.get("is_active", True),
            created_by_id=get_caller(request).user_id,
        )
        return Response(TaskSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        s = TaskUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = TaskService.update(
            task_id=pk_or_404(pk, "Task"),
            patch=TaskUpdate(
                code=d.get("code"),
                name=d.get("name"),
                description=d.get("description"),
                area_id=d.get("area_id"),
                order=d.get("order"),
                is_active=d.get("is_active"),
            ),
        )
        return Response(TaskSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        TaskService.delete(task_id=pk_or_404(pk, "Task"))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(tags=["Tasks"], request=None, responses={200: TaskSerializer})
    @action(detail=True, methods=["post"], url_path="toggle-status")
    def toggle_status(self, request, pk=None):
        obj = TaskService.toggle_status(task_id=pk_or_404(pk, "Task"))
        return Response(TaskSerializer(obj).data, status=status.HTTP_200_OK)
