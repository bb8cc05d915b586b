# ============================================
# tracker/access/resolver.py
# ============================================
"""
Membership resolver.

``accessible_project_ids`` is the only place that decides which projects a
user may access. It reads ``projects`` and ``project_members`` through the
models' base managers, never through ``visible_to``, so resolving access
never depends on already knowing the answer.
"""
import uuid
from typing import FrozenSet, Union

from tracker.models import Membership, Project

UserId = Union[uuid.UUID, str]


def _as_uuid(value: UserId) -> uuid.UUID:
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def accessible_project_ids(user_id: UserId) -> FrozenSet[uuid.UUID]:
    """Projects owned by ``user_id`` united with projects it is a member of."""
    user_id = _as_uuid(user_id)

    owned = (
        Project._base_manager
        .filter(owner_id=user_id)
        .order_by()
        .values_list('id', flat=True)
    )
    joined = (
        Membership._base_manager
        .filter(user_id=user_id)
        .order_by()
        .values_list('project_id', flat=True)
    )
    return frozenset(owned.union(joined))


def has_project_access(user_id: UserId, project_id) -> bool:
    if project_id is None:
        return False
    return _as_uuid(project_id) in accessible_project_ids(user_id)
