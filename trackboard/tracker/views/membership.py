# ============================================
# tracker/views/membership.py
# ============================================
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.exceptions import NotFound
from tracker.selectors.project import MembershipSelector, ProjectSelector
from tracker.serializers.project import (
    MemberInviteSerializer,
    MemberJoinSerializer,
    MemberOutputSerializer,
    MemberRoleSerializer
)
from tracker.services.membership import MembershipService

from .utils import path_uuid, std_errors


@extend_schema_view(
    get=extend_schema(
        tags=["Members"],
        summary="List project members",
        parameters=[path_uuid("project_id", "Project ID")],
        responses={200: MemberOutputSerializer(many=True), **std_errors()},
    ),
    post=extend_schema(
        tags=["Members"],
        summary="Invite a user to the project (owner only)",
        parameters=[path_uuid("project_id", "Project ID")],
        request=MemberInviteSerializer,
        responses={201: MemberOutputSerializer, **std_errors({409: OpenApiResponse(description="Already a member")})},
    ),
)
class MemberListCreateAPIView(APIView):
    """
    GET: List members of a project
    POST: Invite a member

    Request body (POST):
    - user_id: UUID (required)
    - role: admin/developer/viewer (optional, default developer)
    """

    def _get_project(self, request, project_id):
        project = ProjectSelector.get_project_for_user(project_id, request.user.id)
        if not project:
            raise NotFound()
        return project

    def get(self, request, project_id):
        project = self._get_project(request, project_id)

        members = list(MembershipSelector.get_members(project))
        members_with_users = MembershipSelector.enrich_members_with_users(members)

        serializer = MemberOutputSerializer(members_with_users, many=True)
        return Response(serializer.data)

    def post(self, request, project_id):
        project = self._get_project(request, project_id)

        serializer = MemberInviteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = MembershipService.add_member(
            project=project,
            user_id=request.user.id,
            member_id=serializer.validated_data['user_id'],
            role=serializer.validated_data['role']
        )

        members_with_users = MembershipSelector.enrich_members_with_users([membership])
        output_serializer = MemberOutputSerializer(members_with_users[0])

        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=["Members"],
    summary="Accept an invite: add the caller as a member",
    parameters=[path_uuid("project_id", "Project ID")],
    request=MemberJoinSerializer,
    responses={201: MemberOutputSerializer, **std_errors({409: OpenApiResponse(description="Already a member")})},
)
class MemberJoinAPIView(APIView):

    def post(self, request, project_id):
        serializer = MemberJoinSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = MembershipService.join_project(
            project_id=project_id,
            user_id=request.user.id,
            **serializer.validated_data
        )

        members_with_users = MembershipSelector.enrich_members_with_users([membership])
        output_serializer = MemberOutputSerializer(members_with_users[0])

        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    patch=extend_schema(
        tags=["Members"],
        summary="Change a member's role (owner only)",
        parameters=[path_uuid("membership_id", "Membership ID")],
        request=MemberRoleSerializer,
        responses={200: MemberOutputSerializer, **std_errors()},
    ),
    delete=extend_schema(
        tags=["Members"],
        summary="Remove a member (owner only)",
        parameters=[path_uuid("membership_id", "Membership ID")],
        responses={204: OpenApiResponse(description="Removed"), **std_errors()},
    ),
)
class MemberDetailAPIView(APIView):

    def _get_membership(self, request, membership_id):
        membership = MembershipSelector.get_membership_for_user(membership_id, request.user.id)
        if not membership:
            raise NotFound()
        return membership

    def patch(self, request, membership_id):
        membership = self._get_membership(request, membership_id)

        serializer = MemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = MembershipService.update_role(
            membership=membership,
            user_id=request.user.id,
            role=serializer.validated_data['role']
        )

        members_with_users = MembershipSelector.enrich_members_with_users([updated])
        return Response(MemberOutputSerializer(members_with_users[0]).data)

    def delete(self, request, membership_id):
        membership = self._get_membership(request, membership_id)

        MembershipService.remove_member(
            membership=membership,
            user_id=request.user.id
        )

        return Response(status=status.HTTP_204_NO_CONTENT)
