# ============================================
# tracker/selectors/project.py
# ============================================
from typing import List, Optional

from django.db.models import Count, QuerySet

from tracker.clients.user_client import UserServiceClient
from tracker.models import Membership, Project


class ProjectSelector:

    @staticmethod
    def get_project_for_user(project_id, user_id) -> Optional[Project]:
        """Get single project if the user can see it"""
        return Project.objects.visible_to(user_id).filter(id=project_id).first()

    @staticmethod
    def get_projects_for_user(user_id) -> QuerySet:
        """Projects the user owns or is a member of, with dashboard counts"""
        return (
            Project.objects.visible_to(user_id)
            .annotate(
                ticket_count=Count('tickets', distinct=True),
                member_count=Count('memberships', distinct=True)
            )
            .order_by('-created_at')
        )

    @staticmethod
    def enrich_projects_with_users(projects: List[Project]) -> List[Project]:
        """Fetch and attach owner profile data to projects"""
        users_dict = UserServiceClient.get_users_by_ids(p.owner_id for p in projects)

        for project in projects:
            project.owner_data = users_dict.get(str(project.owner_id))

        return projects


class MembershipSelector:

    @staticmethod
    def get_membership_for_user(membership_id, user_id) -> Optional[Membership]:
        """Get single membership row if the user can see its project"""
        return (
            Membership.objects.visible_to(user_id)
            .select_related('project')
            .filter(id=membership_id)
            .first()
        )

    @staticmethod
    def get_members(project: Project) -> QuerySet:
        """All membership rows of a project, oldest first"""
        return Membership.objects.filter(project=project).order_by('joined_at')

    @staticmethod
    def enrich_members_with_users(memberships: List[Membership]) -> List[Membership]:
        users_dict = UserServiceClient.get_users_by_ids(m.user_id for m in memberships)

        for membership in memberships:
            membership.user_data = users_dict.get(str(membership.user_id))

        return memberships
