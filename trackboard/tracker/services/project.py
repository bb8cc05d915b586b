# ============================================
# tracker/services/project.py
# ============================================
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import RestrictedError

from tracker.access import Operation, authorize
from tracker.exceptions import ConflictError
from tracker.models import Project

logger = logging.getLogger(__name__)


class ProjectService:

    UPDATABLE_FIELDS = ('name', 'description')

    @staticmethod
    def _clean_name(name: str) -> str:
        name = (name or '').strip()
        if not name:
            raise ValidationError("Project name is required")
        return name

    @staticmethod
    def create_project(
        *,
        user_id,
        name: str,
        description: str = ''
    ) -> Project:
        """Create a new project owned by the caller"""

        project = Project(
            name=ProjectService._clean_name(name),
            description=(description or '').strip(),
            owner_id=user_id
        )
        authorize(user_id, Operation.CREATE, project)
        project.save()

        logger.info("[project] created %s by %s", project.pk, user_id)
        return project

    @staticmethod
    def update_project(
        *,
        project: Project,
        user_id,
        **data
    ) -> Project:
        """Update project name/description"""

        authorize(user_id, Operation.UPDATE, project)

        unknown = sorted(set(data) - set(ProjectService.UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Fields cannot be changed: {', '.join(unknown)}")

        if 'name' in data:
            project.name = ProjectService._clean_name(data['name'])
        if 'description' in data:
            project.description = (data['description'] or '').strip()

        project.save()
        return project

    @staticmethod
    @transaction.atomic
    def delete_project(*, project: Project, user_id) -> None:
        """Delete project together with its members, tickets and comments"""

        authorize(user_id, Operation.DELETE, project)

        project_id = project.pk
        try:
            project.delete()
        except RestrictedError:
            raise ConflictError("Comments outside this project reply to its comments")
        logger.info("[project] deleted %s by %s", project_id, user_id)
