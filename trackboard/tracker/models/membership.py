# ============================================
# tracker/models/membership.py
# ============================================
import uuid

from django.db import models

from .querysets import MembershipQuerySet


class Membership(models.Model):
    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        DEVELOPER = 'developer', 'Developer'
        VIEWER = 'viewer', 'Viewer'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='memberships'
    )
    user_id = models.UUIDField(db_index=True)
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.DEVELOPER
    )
    invited_by = models.UUIDField(null=True, blank=True)
    joined_at = models.DateTimeField(auto_now_add=True)

    objects = MembershipQuerySet.as_manager()

    class Meta:
        db_table = 'project_members'
        ordering = ['joined_at']
        constraints = [
            models.UniqueConstraint(
                fields=['project', 'user_id'],
                name='uniq_project_member'
            ),
        ]

    def __str__(self):
        return f"{self.user_id} in {self.project_id} ({self.role})"
