# ============================================
# tracker/models/__init__.py
# ============================================
from .project import Project
from .membership import Membership
from .ticket import Ticket
from .comment import Comment
from .history import TicketHistory

__all__ = [
    'Project',
    'Membership',
    'Ticket',
    'Comment',
    'TicketHistory',
]
