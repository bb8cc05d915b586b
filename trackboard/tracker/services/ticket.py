# ============================================
# tracker/services/ticket.py
# ============================================
import logging
from typing import Optional

from django.db import transaction
from django.db.models import RestrictedError

from tracker import workflow
from tracker.access import Operation, authorize
from tracker.exceptions import ConflictError, NotFound
from tracker.models import Project, Ticket

logger = logging.getLogger(__name__)


class TicketService:

    @staticmethod
    @transaction.atomic
    def create_ticket(
        *,
        project_id,
        user_id,
        title: str,
        description: str = '',
        ticket_type: str = Ticket.TicketType.TASK,
        priority: str = Ticket.Priority.MEDIUM,
        status: str = Ticket.Status.TODO,
        assignee_id: Optional[str] = None
    ) -> Ticket:
        """Create a new ticket reported by the caller"""

        project = Project.objects.filter(id=project_id).first()
        if project is None:
            raise NotFound()

        ticket = Ticket(project=project, reporter_id=user_id)
        authorize(user_id, Operation.CREATE, ticket)

        ticket.title = workflow.validate_title(title)
        ticket.description = description or ''
        ticket.type = workflow.validate_choice('type', ticket_type)
        ticket.priority = workflow.validate_choice('priority', priority)
        ticket.status = workflow.validate_choice('status', status)
        # Not checked against membership; callers may enforce it.
        ticket.assignee_id = workflow.normalize_user_id(assignee_id)
        ticket.save()

        workflow.record_history(ticket, user_id, [('created', '', 'Ticket created')])

        logger.info("[ticket] created %s in %s by %s", ticket.pk, project.pk, user_id)
        return ticket

    @staticmethod
    def update_ticket(
        *,
        ticket: Ticket,
        user_id,
        **data
    ) -> Ticket:
        """Update ticket fields and/or status and log changes"""

        authorize(user_id, Operation.UPDATE, ticket)

        changes = workflow.plan_changes(ticket, data)
        return workflow.apply_changes(ticket, user_id=user_id, changes=changes)

    @staticmethod
    def delete_ticket(*, ticket: Ticket, user_id) -> None:
        """Delete ticket"""

        authorize(user_id, Operation.DELETE, ticket)

        ticket_id = ticket.pk
        try:
            ticket.delete()
        except RestrictedError:
            raise ConflictError("Comments on other tickets reply to this ticket")
        logger.info("[ticket] deleted %s by %s", ticket_id, user_id)
