# ============================================
# tracker/models/querysets.py
# ============================================
"""
Row filters for the tracker models.

``visible_to(user_id)`` is the set-based form of the read rule for each
model. Every filter is expressed in terms of the project ids returned by
``tracker.access.resolver.accessible_project_ids``; none of them computes
project access on its own.
"""
from django.db import models


def _accessible(user_id):
    from tracker.access.resolver import accessible_project_ids
    return accessible_project_ids(user_id)


class ProjectQuerySet(models.QuerySet):

    def visible_to(self, user_id):
        return self.filter(id__in=_accessible(user_id))


class MembershipQuerySet(models.QuerySet):

    def visible_to(self, user_id):
        return self.filter(project_id__in=_accessible(user_id))


class TicketQuerySet(models.QuerySet):

    def visible_to(self, user_id):
        return self.filter(project_id__in=_accessible(user_id))


class CommentQuerySet(models.QuerySet):

    def visible_to(self, user_id):
        return self.filter(ticket__project_id__in=_accessible(user_id))


class TicketHistoryQuerySet(models.QuerySet):

    def visible_to(self, user_id):
        return self.filter(ticket__project_id__in=_accessible(user_id))
