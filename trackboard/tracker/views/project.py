# ============================================
# tracker/views/project.py
# ============================================
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.exceptions import NotFound
from tracker.selectors.project import ProjectSelector
from tracker.selectors.ticket import TicketSelector
from tracker.serializers.project import (
    ProjectCreateSerializer,
    ProjectOutputSerializer,
    ProjectUpdateSerializer
)
from tracker.serializers.ticket import BoardOutputSerializer
from tracker.services.project import ProjectService

from .utils import PAGE_PARAMS, path_uuid, std_errors


class ProjectPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema_view(
    get=extend_schema(
        tags=["Projects"],
        summary="List projects the caller owns or is a member of",
        parameters=PAGE_PARAMS,
        responses={200: ProjectOutputSerializer(many=True), **std_errors()},
    ),
    post=extend_schema(
        tags=["Projects"],
        summary="Create a project (caller becomes owner)",
        request=ProjectCreateSerializer,
        responses={201: ProjectOutputSerializer, **std_errors()},
    ),
)
class ProjectListCreateAPIView(APIView):
    """
    GET: List all projects for current user
    POST: Create a new project

    Request body (POST):
    - name: string (required)
    - description: string (optional)
    """

    def get(self, request):
        projects = ProjectSelector.get_projects_for_user(request.user.id)

        paginator = ProjectPagination()
        page = paginator.paginate_queryset(projects, request, view=self)

        projects_with_users = ProjectSelector.enrich_projects_with_users(page)

        serializer = ProjectOutputSerializer(projects_with_users, many=True)
        return paginator.get_paginated_response(serializer.data)

    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = ProjectService.create_project(
            user_id=request.user.id,
            **serializer.validated_data
        )

        projects_with_users = ProjectSelector.enrich_projects_with_users([project])
        output_serializer = ProjectOutputSerializer(projects_with_users[0])

        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    get=extend_schema(
        tags=["Projects"],
        summary="Retrieve a project",
        parameters=[path_uuid("project_id", "Project ID")],
        responses={200: ProjectOutputSerializer, **std_errors()},
    ),
    patch=extend_schema(
        tags=["Projects"],
        summary="Update project name/description (owner only)",
        parameters=[path_uuid("project_id", "Project ID")],
        request=ProjectUpdateSerializer,
        responses={200: ProjectOutputSerializer, **std_errors()},
    ),
    delete=extend_schema(
        tags=["Projects"],
        summary="Delete project with its members, tickets and comments (owner only)",
        parameters=[path_uuid("project_id", "Project ID")],
        responses={204: OpenApiResponse(description="Deleted"), **std_errors()},
    ),
)
class ProjectDetailAPIView(APIView):

    def _get_project(self, request, project_id):
        project = ProjectSelector.get_project_for_user(project_id, request.user.id)
        if not project:
            raise NotFound()
        return project

    def get(self, request, project_id):
        project = self._get_project(request, project_id)

        projects_with_users = ProjectSelector.enrich_projects_with_users([project])
        serializer = ProjectOutputSerializer(projects_with_users[0])

        return Response(serializer.data)

    def patch(self, request, project_id):
        project = self._get_project(request, project_id)

        serializer = ProjectUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated_project = ProjectService.update_project(
            project=project,
            user_id=request.user.id,
            **serializer.validated_data
        )

        projects_with_users = ProjectSelector.enrich_projects_with_users([updated_project])
        output_serializer = ProjectOutputSerializer(projects_with_users[0])

        return Response(output_serializer.data)

    def delete(self, request, project_id):
        project = self._get_project(request, project_id)

        ProjectService.delete_project(
            project=project,
            user_id=request.user.id
        )

        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    tags=["Projects"],
    summary="Kanban board: project tickets grouped by status",
    parameters=[path_uuid("project_id", "Project ID")],
    responses={200: BoardOutputSerializer, **std_errors()},
)
class ProjectBoardAPIView(APIView):

    def get(self, request, project_id):
        project = ProjectSelector.get_project_for_user(project_id, request.user.id)
        if not project:
            raise NotFound()

        board = TicketSelector.get_board(project)
        TicketSelector.enrich_tickets_with_users(
            [ticket for column in board.values() for ticket in column]
        )

        return Response(BoardOutputSerializer(board).data)
