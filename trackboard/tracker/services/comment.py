# ============================================
# tracker/services/comment.py
# ============================================
import logging
from typing import Optional

from django.core.exceptions import ValidationError
from django.db.models import RestrictedError

from tracker.access import Operation, authorize
from tracker.exceptions import ConflictError
from tracker.models import Comment, Ticket

logger = logging.getLogger(__name__)


class CommentService:

    @staticmethod
    def _clean_content(content: str) -> str:
        content = (content or '').strip()
        if not content:
            raise ValidationError("Comment content is required")
        return content

    @staticmethod
    def create_comment(
        *,
        ticket: Ticket,
        user_id,
        content: str,
        parent_id: Optional[str] = None
    ) -> Comment:
        """Create a comment on a ticket"""

        comment = Comment(ticket=ticket, author_id=user_id)
        authorize(user_id, Operation.CREATE, comment)

        if parent_id:
            # Any readable comment works as a parent, even on another ticket.
            comment.parent = Comment.objects.visible_to(user_id).filter(id=parent_id).first()
            if comment.parent is None:
                raise ValidationError("Parent comment not found")

        comment.content = CommentService._clean_content(content)
        comment.save()

        logger.info("[comment] %s on ticket %s by %s", comment.pk, ticket.pk, user_id)
        return comment

    @staticmethod
    def update_comment(
        *,
        comment: Comment,
        user_id,
        content: str
    ) -> Comment:
        """Update a comment"""

        authorize(user_id, Operation.UPDATE, comment)

        comment.content = CommentService._clean_content(content)
        comment.save(update_fields=['content', 'updated_at'])
        return comment

    @staticmethod
    def delete_comment(*, comment: Comment, user_id) -> None:
        """Delete a comment"""

        authorize(user_id, Operation.DELETE, comment)

        try:
            comment.delete()
        except RestrictedError:
            raise ConflictError("Comment has replies and cannot be deleted")
