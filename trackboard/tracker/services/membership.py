# ============================================
# tracker/services/membership.py
# ============================================
import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from tracker.access import Operation, authorize
from tracker.exceptions import ConflictError, NotFound
from tracker.models import Membership, Project
from tracker.workflow import normalize_user_id

logger = logging.getLogger(__name__)


class MembershipService:

    @staticmethod
    def _validate_role(role: str) -> str:
        if role not in Membership.Role.values:
            raise ValidationError(f"Unknown role '{role}'")
        return role

    @staticmethod
    def add_member(
        *,
        project: Project,
        user_id,
        member_id,
        role: str = Membership.Role.DEVELOPER
    ) -> Membership:
        """Invite ``member_id`` (owner) or join as ``member_id == user_id``"""

        member_id = normalize_user_id(member_id)
        if member_id is None:
            raise ValidationError("Member user id is required")

        membership = Membership(
            project=project,
            user_id=member_id,
            role=MembershipService._validate_role(role),
            invited_by=None if str(member_id) == str(user_id) else user_id
        )
        authorize(user_id, Operation.CREATE, membership)

        if str(member_id) == str(project.owner_id):
            raise ValidationError("Project owner already has access")

        if Membership.objects.filter(project=project, user_id=member_id).exists():
            raise ConflictError("User is already a member of this project")

        try:
            with transaction.atomic():
                membership.save(force_insert=True)
        except IntegrityError:
            raise ConflictError("User is already a member of this project")

        logger.info(
            "[member] %s added to %s as %s by %s",
            member_id, project.pk, membership.role, user_id
        )
        return membership

    @staticmethod
    def join_project(
        *,
        project_id,
        user_id,
        role: str = Membership.Role.DEVELOPER
    ) -> Membership:
        """Accept an invite: the caller inserts their own membership row"""

        # The caller cannot see the project yet, so look it up unfiltered.
        project = Project.objects.filter(id=project_id).first()
        if project is None:
            raise NotFound()

        return MembershipService.add_member(
            project=project,
            user_id=user_id,
            member_id=user_id,
            role=role
        )

    @staticmethod
    def update_role(*, membership: Membership, user_id, role: str) -> Membership:
        """Change a member's role"""

        authorize(user_id, Operation.UPDATE, membership)

        membership.role = MembershipService._validate_role(role)
        membership.save(update_fields=['role'])
        return membership

    @staticmethod
    def remove_member(*, membership: Membership, user_id) -> None:
        """Remove a member from the project"""

        authorize(user_id, Operation.DELETE, membership)

        membership.delete()
        logger.info(
            "[member] %s removed from %s by %s",
            membership.user_id, membership.project_id, user_id
        )
