# ============================================
# tracker/selectors/comment.py
# ============================================
from typing import List, Optional

from django.db.models import QuerySet

from tracker.clients.user_client import UserServiceClient
from tracker.models import Comment, Ticket


class CommentSelector:

    @staticmethod
    def get_comment_for_user(comment_id, user_id) -> Optional[Comment]:
        """Get single comment if the user can see its ticket"""
        return (
            Comment.objects.visible_to(user_id)
            .select_related('ticket', 'ticket__project')
            .filter(id=comment_id)
            .first()
        )

    @staticmethod
    def get_comments_by_ticket(ticket: Ticket) -> QuerySet:
        """Get all comments for a ticket in display order"""
        return Comment.objects.filter(ticket=ticket).order_by('created_at', 'id')

    @staticmethod
    def enrich_comments_with_users(comments: List[Comment]) -> List[Comment]:
        """Fetch and attach user data to comments"""
        users_dict = UserServiceClient.get_users_by_ids(c.author_id for c in comments)

        for comment in comments:
            comment.author_data = users_dict.get(str(comment.author_id))

        return comments
