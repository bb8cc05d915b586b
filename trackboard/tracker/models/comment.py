# ============================================
# tracker/models/comment.py
# ============================================
import uuid

from django.db import models

from .querysets import CommentQuerySet


class Comment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ticket = models.ForeignKey(
        'Ticket',
        on_delete=models.CASCADE,
        related_name='comments'
    )
    author_id = models.UUIDField(db_index=True)
    # A reply keeps its parent alive unless both go away in the same cascade.
    parent = models.ForeignKey(
        'self',
        on_delete=models.RESTRICT,
        null=True,
        blank=True,
        related_name='replies'
    )
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CommentQuerySet.as_manager()

    class Meta:
        db_table = 'comments'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['ticket', 'created_at'], name='comments_ticket_created_idx'),
        ]

    def __str__(self):
        return f"Comment on {self.ticket_id}"
