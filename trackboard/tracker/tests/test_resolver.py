import pytest

from tracker.access import accessible_project_ids, has_project_access
from tracker.models import Membership, Project
from tracker.models.querysets import MembershipQuerySet, ProjectQuerySet
from tracker.services import MembershipService, ProjectService


@pytest.mark.django_db
def test_owner_and_member_resolve_outsider_does_not(project, bob_membership, alice, bob, carol):
    assert accessible_project_ids(alice) == {project.id}
    assert accessible_project_ids(bob) == {project.id}
    assert accessible_project_ids(carol) == frozenset()


@pytest.mark.django_db
def test_union_of_owned_and_joined_projects(project, bob_membership, bob):
    own = ProjectService.create_project(user_id=bob, name="Bob's side project")

    assert accessible_project_ids(bob) == {project.id, own.id}


@pytest.mark.django_db
def test_owner_needs_no_membership_row(project, alice):
    assert not Membership.objects.filter(project=project, user_id=alice).exists()
    assert has_project_access(alice, project.id)


@pytest.mark.django_db
def test_owner_with_stray_membership_row_is_counted_once(project, alice):
    Membership.objects.create(project=project, user_id=alice)

    assert accessible_project_ids(alice) == {project.id}


@pytest.mark.django_db
def test_access_follows_membership_rows_immediately(project, alice, carol):
    assert not has_project_access(carol, project.id)

    membership = MembershipService.add_member(project=project, user_id=alice, member_id=carol)
    assert has_project_access(carol, project.id)

    MembershipService.remove_member(membership=membership, user_id=alice)
    assert not has_project_access(carol, project.id)


@pytest.mark.django_db
def test_deleted_project_leaves_every_access_set(project, bob_membership, alice, bob):
    ProjectService.delete_project(project=project, user_id=alice)

    assert accessible_project_ids(alice) == frozenset()
    assert accessible_project_ids(bob) == frozenset()


@pytest.mark.django_db
def test_accepts_string_ids(project, alice):
    assert accessible_project_ids(str(alice)) == {project.id}
    assert has_project_access(str(alice), str(project.id))


@pytest.mark.django_db
def test_unknown_user_and_missing_project(project, carol):
    assert accessible_project_ids(carol) == frozenset()
    assert has_project_access(carol, None) is False


@pytest.mark.django_db
def test_resolver_never_goes_through_row_filters(monkeypatch, project, bob_membership, alice, bob):
    def row_filter(self, user_id):
        raise AssertionError("resolver must not depend on visible_to")

    monkeypatch.setattr(ProjectQuerySet, "visible_to", row_filter)
    monkeypatch.setattr(MembershipQuerySet, "visible_to", row_filter)

    assert accessible_project_ids(alice) == {project.id}
    assert accessible_project_ids(bob) == {project.id}


@pytest.mark.django_db
def test_membership_rows_are_visible_through_resolver_based_filter(project, bob_membership, dave_membership, bob, carol):
    # members see each other's rows; the filter itself asks the resolver
    assert set(Membership.objects.visible_to(bob)) == {bob_membership, dave_membership}
    assert list(Membership.objects.visible_to(carol)) == []
    assert list(Project.objects.visible_to(carol)) == []
