# ============================================
# tracker/selectors/ticket.py
# ============================================
from typing import Dict, List, Optional

from django.db.models import Q, QuerySet

from tracker.clients.user_client import UserServiceClient
from tracker.models import Project, Ticket, TicketHistory


class TicketSelector:

    @staticmethod
    def get_ticket_for_user(ticket_id, user_id) -> Optional[Ticket]:
        """Get single ticket with its project if the user can see it"""
        return (
            Ticket.objects.visible_to(user_id)
            .select_related('project')
            .filter(id=ticket_id)
            .first()
        )

    @staticmethod
    def get_tickets_list(
        user_id,
        project_id=None,
        status: str = None,
        priority: str = None,
        ticket_type: str = None,
        assignee_id=None,
        reporter_id=None,
        search: str = None
    ) -> QuerySet:
        """Get filtered tickets list restricted to the user's projects"""
        queryset = Ticket.objects.visible_to(user_id).select_related('project')

        if project_id:
            queryset = queryset.filter(project_id=project_id)

        if status:
            queryset = queryset.filter(status=status)

        if priority:
            queryset = queryset.filter(priority=priority)

        if ticket_type:
            queryset = queryset.filter(type=ticket_type)

        if assignee_id:
            queryset = queryset.filter(assignee_id=assignee_id)

        if reporter_id:
            queryset = queryset.filter(reporter_id=reporter_id)

        if search:
            queryset = queryset.filter(
                Q(title__icontains=search) |
                Q(description__icontains=search)
            )

        return queryset.order_by('-created_at')

    @staticmethod
    def get_board(project: Project) -> Dict[str, List[Ticket]]:
        """Tickets of a project grouped into one column per status"""
        board = {status: [] for status in Ticket.Status.values}

        for ticket in Ticket.objects.filter(project=project).order_by('-created_at'):
            board[ticket.status].append(ticket)

        return board

    @staticmethod
    def get_history(ticket: Ticket) -> QuerySet:
        return TicketHistory.objects.filter(ticket=ticket).order_by('-created_at', '-id')

    @staticmethod
    def enrich_tickets_with_users(tickets: List[Ticket]) -> List[Ticket]:
        """Fetch and attach user data to tickets"""
        user_ids = set()

        for ticket in tickets:
            if ticket.assignee_id:
                user_ids.add(ticket.assignee_id)
            user_ids.add(ticket.reporter_id)

        users_dict = UserServiceClient.get_users_by_ids(user_ids)

        for ticket in tickets:
            ticket.assignee_data = users_dict.get(str(ticket.assignee_id)) if ticket.assignee_id else None
            ticket.reporter_data = users_dict.get(str(ticket.reporter_id))

        return tickets
