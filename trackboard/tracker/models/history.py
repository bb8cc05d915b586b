# ============================================
# tracker/models/history.py
# ============================================
from django.db import models

from .querysets import TicketHistoryQuerySet


class TicketHistory(models.Model):
    ticket = models.ForeignKey(
        'Ticket',
        on_delete=models.CASCADE,
        related_name='history'
    )
    user_id = models.UUIDField(db_index=True)
    field_name = models.CharField(max_length=50)
    old_value = models.TextField(blank=True)
    new_value = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TicketHistoryQuerySet.as_manager()

    class Meta:
        db_table = 'ticket_history'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['ticket', '-created_at'], name='history_ticket_created_idx'),
        ]

    def __str__(self):
        return f"{self.ticket_id} - {self.field_name} changed"
