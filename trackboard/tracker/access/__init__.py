# ============================================
# tracker/access/__init__.py
# ============================================
from .resolver import accessible_project_ids, has_project_access
from .policy import Decision, Operation, authorize, can_perform

__all__ = [
    'accessible_project_ids',
    'has_project_access',
    'Decision',
    'Operation',
    'authorize',
    'can_perform',
]
