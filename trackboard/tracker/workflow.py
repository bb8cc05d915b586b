# ============================================
# tracker/workflow.py
# ============================================
"""
Ticket workflow.

Statuses form a complete graph: any status may move to any other, and moving
to the current status is a no-op. Field edits ride along with status changes
in the same update. Every applied change leaves one ``TicketHistory`` row.
"""
import logging
import uuid
from typing import Any, Dict, Iterable, Optional, Tuple

from django.core.exceptions import ValidationError
from django.db import transaction

from tracker.models import Ticket, TicketHistory

logger = logging.getLogger(__name__)

STATUS_TRANSITIONS = {
    status: frozenset(s for s in Ticket.Status.values if s != status)
    for status in Ticket.Status.values
}

EDITABLE_FIELDS = ('title', 'description', 'type', 'priority', 'status', 'assignee_id')
IMMUTABLE_FIELDS = ('project', 'project_id', 'reporter_id')

CHOICE_FIELDS = {
    'type': Ticket.TicketType.values,
    'priority': Ticket.Priority.values,
    'status': Ticket.Status.values,
}

Changes = Dict[str, Tuple[Any, Any]]


def validate_choice(field: str, value: str) -> str:
    if value not in CHOICE_FIELDS[field]:
        raise ValidationError(f"Unknown {field} '{value}'")
    return value


def validate_title(title: Optional[str]) -> str:
    title = (title or '').strip()
    if not title:
        raise ValidationError("Title is required")
    return title


def normalize_user_id(value) -> Optional[uuid.UUID]:
    if value in (None, ''):
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid user id '{value}'")


def can_transition(current: str, target: str) -> bool:
    return target == current or target in STATUS_TRANSITIONS.get(current, ())


def plan_changes(ticket: Ticket, data: Dict[str, Any]) -> Changes:
    """Validate an update payload and return {field: (old, new)} for real changes."""
    locked = sorted(set(data) & set(IMMUTABLE_FIELDS))
    if locked:
        raise ValidationError(f"Fields cannot be changed: {', '.join(locked)}")

    unknown = sorted(set(data) - set(EDITABLE_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(unknown)}")

    changes: Changes = {}
    for field in EDITABLE_FIELDS:
        if field not in data:
            continue
        new_value = data[field]

        if field in CHOICE_FIELDS:
            validate_choice(field, new_value)
        elif field == 'title':
            new_value = validate_title(new_value)
        elif field == 'description':
            new_value = new_value or ''
        elif field == 'assignee_id':
            new_value = normalize_user_id(new_value)

        old_value = getattr(ticket, field)
        if field == 'assignee_id':
            old_value = normalize_user_id(old_value)

        if field == 'status' and not can_transition(old_value, new_value):
            raise ValidationError(f"Cannot move ticket from {old_value} to {new_value}")

        if old_value != new_value:
            changes[field] = (old_value, new_value)

    return changes


def _as_text(value) -> str:
    return '' if value is None else str(value)


def record_history(ticket: Ticket, user_id, entries: Iterable[Tuple[str, Any, Any]]) -> None:
    TicketHistory.objects.bulk_create([
        TicketHistory(
            ticket=ticket,
            user_id=user_id,
            field_name=field_name,
            old_value=_as_text(old_value),
            new_value=_as_text(new_value),
        )
        for field_name, old_value, new_value in entries
    ])


@transaction.atomic
def apply_changes(ticket: Ticket, *, user_id, changes: Changes) -> Ticket:
    if not changes:
        return ticket

    for field, (_, new_value) in changes.items():
        setattr(ticket, field, new_value)
    ticket.save(update_fields=[*changes.keys(), 'updated_at'])

    record_history(
        ticket,
        user_id,
        ((field, old, new) for field, (old, new) in changes.items())
    )

    if 'status' in changes:
        old_status, new_status = changes['status']
        logger.info("[ticket] %s status %s -> %s by %s", ticket.pk, old_status, new_status, user_id)

    return ticket
