# ============================================
# tracker/views/comment.py
# ============================================
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.exceptions import NotFound
from tracker.selectors.comment import CommentSelector
from tracker.selectors.ticket import TicketSelector
from tracker.serializers.comment import (
    CommentCreateSerializer,
    CommentOutputSerializer,
    CommentUpdateSerializer
)
from tracker.services.comment import CommentService

from .utils import path_uuid, std_errors


@extend_schema_view(
    get=extend_schema(
        tags=["Comments"],
        summary="List comments of a ticket, oldest first",
        parameters=[path_uuid("ticket_id", "Ticket ID")],
        responses={200: CommentOutputSerializer(many=True), **std_errors()},
    ),
    post=extend_schema(
        tags=["Comments"],
        summary="Comment on a ticket",
        parameters=[path_uuid("ticket_id", "Ticket ID")],
        request=CommentCreateSerializer,
        responses={201: CommentOutputSerializer, **std_errors()},
    ),
)
class CommentListCreateAPIView(APIView):
    """
    GET: List comments for a ticket
    POST: Create a comment

    Request body (POST):
    - content: string (required)
    - parent_id: UUID (optional, reply to another comment)
    """

    def _get_ticket(self, request, ticket_id):
        ticket = TicketSelector.get_ticket_for_user(ticket_id, request.user.id)
        if not ticket:
            raise NotFound()
        return ticket

    def get(self, request, ticket_id):
        ticket = self._get_ticket(request, ticket_id)

        comments = list(CommentSelector.get_comments_by_ticket(ticket))
        comments_with_users = CommentSelector.enrich_comments_with_users(comments)

        serializer = CommentOutputSerializer(comments_with_users, many=True)
        return Response(serializer.data)

    def post(self, request, ticket_id):
        ticket = self._get_ticket(request, ticket_id)

        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        comment = CommentService.create_comment(
            ticket=ticket,
            user_id=request.user.id,
            **serializer.validated_data
        )

        comments_with_users = CommentSelector.enrich_comments_with_users([comment])
        output_serializer = CommentOutputSerializer(comments_with_users[0])

        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    patch=extend_schema(
        tags=["Comments"],
        summary="Edit a comment (author only)",
        parameters=[path_uuid("comment_id", "Comment ID")],
        request=CommentUpdateSerializer,
        responses={200: CommentOutputSerializer, **std_errors()},
    ),
    delete=extend_schema(
        tags=["Comments"],
        summary="Delete a comment (author only)",
        parameters=[path_uuid("comment_id", "Comment ID")],
        responses={204: OpenApiResponse(description="Deleted"), **std_errors({409: OpenApiResponse(description="Comment has replies")})},
    ),
)
class CommentDetailAPIView(APIView):

    def _get_comment(self, request, comment_id):
        comment = CommentSelector.get_comment_for_user(comment_id, request.user.id)
        if not comment:
            raise NotFound()
        return comment

    def patch(self, request, comment_id):
        comment = self._get_comment(request, comment_id)

        serializer = CommentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated_comment = CommentService.update_comment(
            comment=comment,
            user_id=request.user.id,
            **serializer.validated_data
        )

        comments_with_users = CommentSelector.enrich_comments_with_users([updated_comment])
        output_serializer = CommentOutputSerializer(comments_with_users[0])

        return Response(output_serializer.data)

    def delete(self, request, comment_id):
        comment = self._get_comment(request, comment_id)

        CommentService.delete_comment(
            comment=comment,
            user_id=request.user.id
        )

        return Response(status=status.HTTP_204_NO_CONTENT)
