# ============================================
# tracker/access/policy.py
# ============================================
"""
Policy evaluator.

``can_perform`` answers allow/deny for one (user, operation, entity) triple.
Rules are looked up by entity type and operation; anything without a rule is
denied. The evaluator only reads, it never writes.

``authorize`` is the enforcement wrapper used by the services: a denied
caller who cannot even read the record gets ``NotFound``, everyone else gets
``AccessDenied``.
"""
import enum
import logging
from typing import Callable, Dict, Tuple

from tracker.access.resolver import UserId, has_project_access
from tracker.exceptions import AccessDenied, NotFound
from tracker.models import Comment, Membership, Project, Ticket, TicketHistory

logger = logging.getLogger(__name__)


class Operation(str, enum.Enum):
    READ = 'read'
    CREATE = 'create'
    UPDATE = 'update'
    DELETE = 'delete'


class Decision(enum.Enum):
    ALLOW = 'allow'
    DENY = 'deny'

    def __bool__(self):
        return self is Decision.ALLOW


def _same_user(a, b) -> bool:
    if a is None or b is None:
        return False
    return str(a).lower() == str(b).lower()


def _owns_project(user_id, project) -> bool:
    return project is not None and _same_user(project.owner_id, user_id)


# ---- Project

def _project_read(user_id, project: Project) -> bool:
    return has_project_access(user_id, project.pk)


def _project_create(user_id, project: Project) -> bool:
    return True


def _project_owner_only(user_id, project: Project) -> bool:
    return _owns_project(user_id, project)


# ---- Membership

def _membership_read(user_id, membership: Membership) -> bool:
    return has_project_access(user_id, membership.project_id)


def _membership_create(user_id, membership: Membership) -> bool:
    # owner invites anyone; anyone else may only insert themselves
    return (
        _owns_project(user_id, membership.project)
        or _same_user(membership.user_id, user_id)
    )


def _membership_owner_only(user_id, membership: Membership) -> bool:
    return _owns_project(user_id, membership.project)


# ---- Ticket

def _ticket_read(user_id, ticket: Ticket) -> bool:
    return has_project_access(user_id, ticket.project_id)


def _ticket_create(user_id, ticket: Ticket) -> bool:
    return (
        has_project_access(user_id, ticket.project_id)
        and _same_user(ticket.reporter_id, user_id)
    )


def _ticket_update(user_id, ticket: Ticket) -> bool:
    return (
        _same_user(ticket.assignee_id, user_id)
        or _owns_project(user_id, ticket.project)
    )


def _ticket_delete(user_id, ticket: Ticket) -> bool:
    return _owns_project(user_id, ticket.project)


# ---- Comment

def _comment_read(user_id, comment: Comment) -> bool:
    return _ticket_read(user_id, comment.ticket)


def _comment_create(user_id, comment: Comment) -> bool:
    return (
        _ticket_read(user_id, comment.ticket)
        and _same_user(comment.author_id, user_id)
    )


def _comment_author_only(user_id, comment: Comment) -> bool:
    return _same_user(comment.author_id, user_id)


# ---- Ticket history (read-only)

def _history_read(user_id, entry: TicketHistory) -> bool:
    return _ticket_read(user_id, entry.ticket)


Rule = Callable[[UserId, object], bool]

RULES: Dict[Tuple[type, Operation], Rule] = {
    (Project, Operation.READ): _project_read,
    (Project, Operation.CREATE): _project_create,
    (Project, Operation.UPDATE): _project_owner_only,
    (Project, Operation.DELETE): _project_owner_only,

    (Membership, Operation.READ): _membership_read,
    (Membership, Operation.CREATE): _membership_create,
    (Membership, Operation.UPDATE): _membership_owner_only,
    (Membership, Operation.DELETE): _membership_owner_only,

    (Ticket, Operation.READ): _ticket_read,
    (Ticket, Operation.CREATE): _ticket_create,
    (Ticket, Operation.UPDATE): _ticket_update,
    (Ticket, Operation.DELETE): _ticket_delete,

    (Comment, Operation.READ): _comment_read,
    (Comment, Operation.CREATE): _comment_create,
    (Comment, Operation.UPDATE): _comment_author_only,
    (Comment, Operation.DELETE): _comment_author_only,

    (TicketHistory, Operation.READ): _history_read,
}


def can_perform(user_id: UserId, operation, entity) -> Decision:
    try:
        operation = Operation(operation)
    except ValueError:
        return Decision.DENY

    rule = RULES.get((type(entity), operation))
    if rule is None or not rule(user_id, entity):
        logger.debug(
            "[policy] deny user=%s op=%s entity=%s id=%s",
            user_id, operation.value, type(entity).__name__, getattr(entity, 'pk', None)
        )
        return Decision.DENY
    return Decision.ALLOW


def _can_see_target(user_id: UserId, operation: Operation, entity) -> bool:
    """Whether a denied caller is allowed to learn that the target exists."""
    if operation is Operation.READ:
        return False
    if operation is Operation.CREATE:
        if isinstance(entity, Membership):
            return has_project_access(user_id, entity.project_id)
        if isinstance(entity, Ticket):
            return has_project_access(user_id, entity.project_id)
        if isinstance(entity, Comment):
            return bool(can_perform(user_id, Operation.READ, entity.ticket))
        return True
    return bool(can_perform(user_id, Operation.READ, entity))


def authorize(user_id: UserId, operation, entity) -> None:
    operation = Operation(operation)
    if can_perform(user_id, operation, entity):
        return
    if not _can_see_target(user_id, operation, entity):
        raise NotFound()
    raise AccessDenied(
        f"Not allowed to {operation.value} this {type(entity).__name__.lower()}"
    )
