from .project import ProjectService
from .membership import MembershipService
from .ticket import TicketService
from .comment import CommentService

__all__ = [
    'ProjectService',
    'MembershipService',
    'TicketService',
    'CommentService',
]
