# ============================================
# tracker/views/ticket.py
# ============================================
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.exceptions import NotFound
from tracker.models import Ticket
from tracker.selectors.ticket import TicketSelector
from tracker.serializers.ticket import (
    TicketCreateSerializer,
    TicketHistoryOutputSerializer,
    TicketListOutputSerializer,
    TicketOutputSerializer,
    TicketUpdateSerializer
)
from tracker.services.ticket import TicketService

from .utils import PAGE_PARAMS, path_uuid, q_str, q_uuid, std_errors


class TicketPagination(PageNumberPagination):
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


TICKET_FILTER_PARAMS = [
    q_uuid("project_id", "Only tickets of this project"),
    q_str("status", "Ticket status", enum=Ticket.Status.values),
    q_str("priority", "Ticket priority", enum=Ticket.Priority.values),
    q_str("type", "Ticket type", enum=Ticket.TicketType.values),
    q_uuid("assignee_id", "Assigned user"),
    q_uuid("reporter_id", "Reporting user"),
    q_str("search", "Case-insensitive match on title/description"),
]


@extend_schema_view(
    get=extend_schema(
        tags=["Tickets"],
        summary="List tickets visible to the caller",
        parameters=TICKET_FILTER_PARAMS + PAGE_PARAMS,
        responses={200: TicketListOutputSerializer(many=True), **std_errors()},
    ),
    post=extend_schema(
        tags=["Tickets"],
        summary="Create a ticket (caller becomes reporter)",
        request=TicketCreateSerializer,
        responses={201: TicketOutputSerializer, **std_errors()},
    ),
)
class TicketListCreateAPIView(APIView):
    """
    GET: List tickets with filters
    POST: Create a new ticket

    Request body (POST):
    - project_id: UUID (required)
    - title: string (required)
    - description: string (optional)
    - type: bug/feature/task (optional, default task)
    - priority: low/medium/high/critical (optional, default medium)
    - status: todo/in_progress/done (optional, default todo)
    - assignee_id: UUID (optional)
    """

    def get(self, request):
        filters = {
            'project_id': request.query_params.get('project_id'),
            'status': request.query_params.get('status'),
            'priority': request.query_params.get('priority'),
            'ticket_type': request.query_params.get('type'),
            'assignee_id': request.query_params.get('assignee_id'),
            'reporter_id': request.query_params.get('reporter_id'),
            'search': request.query_params.get('search'),
        }

        # Remove None values
        filters = {k: v for k, v in filters.items() if v is not None}

        tickets = TicketSelector.get_tickets_list(request.user.id, **filters)

        paginator = TicketPagination()
        page = paginator.paginate_queryset(tickets, request, view=self)

        tickets_with_users = TicketSelector.enrich_tickets_with_users(page)

        serializer = TicketListOutputSerializer(tickets_with_users, many=True)
        return paginator.get_paginated_response(serializer.data)

    def post(self, request):
        serializer = TicketCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ticket = TicketService.create_ticket(
            user_id=request.user.id,
            **serializer.validated_data
        )

        tickets_with_users = TicketSelector.enrich_tickets_with_users([ticket])
        output_serializer = TicketOutputSerializer(tickets_with_users[0])

        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    get=extend_schema(
        tags=["Tickets"],
        summary="Retrieve a ticket",
        parameters=[path_uuid("ticket_id", "Ticket ID")],
        responses={200: TicketOutputSerializer, **std_errors()},
    ),
    patch=extend_schema(
        tags=["Tickets"],
        summary="Update fields and/or move the ticket to another status (assignee or project owner)",
        parameters=[path_uuid("ticket_id", "Ticket ID")],
        request=TicketUpdateSerializer,
        responses={200: TicketOutputSerializer, **std_errors()},
    ),
    delete=extend_schema(
        tags=["Tickets"],
        summary="Delete a ticket (project owner only)",
        parameters=[path_uuid("ticket_id", "Ticket ID")],
        responses={204: OpenApiResponse(description="Deleted"), **std_errors()},
    ),
)
class TicketDetailAPIView(APIView):

    def _get_ticket(self, request, ticket_id):
        ticket = TicketSelector.get_ticket_for_user(ticket_id, request.user.id)
        if not ticket:
            raise NotFound()
        return ticket

    def get(self, request, ticket_id):
        ticket = self._get_ticket(request, ticket_id)

        tickets_with_users = TicketSelector.enrich_tickets_with_users([ticket])
        serializer = TicketOutputSerializer(tickets_with_users[0])

        return Response(serializer.data)

    def patch(self, request, ticket_id):
        ticket = self._get_ticket(request, ticket_id)

        serializer = TicketUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated_ticket = TicketService.update_ticket(
            ticket=ticket,
            user_id=request.user.id,
            **serializer.validated_data
        )

        tickets_with_users = TicketSelector.enrich_tickets_with_users([updated_ticket])
        output_serializer = TicketOutputSerializer(tickets_with_users[0])

        return Response(output_serializer.data)

    def delete(self, request, ticket_id):
        ticket = self._get_ticket(request, ticket_id)

        TicketService.delete_ticket(
            ticket=ticket,
            user_id=request.user.id
        )

        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    tags=["Tickets"],
    summary="Change history of a ticket, newest first",
    parameters=[path_uuid("ticket_id", "Ticket ID")],
    responses={200: TicketHistoryOutputSerializer(many=True), **std_errors()},
)
class TicketHistoryAPIView(APIView):

    def get(self, request, ticket_id):
        ticket = TicketSelector.get_ticket_for_user(ticket_id, request.user.id)
        if not ticket:
            raise NotFound()

        history = TicketSelector.get_history(ticket)
        return Response(TicketHistoryOutputSerializer(history, many=True).data)
