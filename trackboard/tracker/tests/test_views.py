import uuid
from unittest.mock import patch

import pytest
from rest_framework import status
from rest_framework.test import APIClient

from tracker.models import Membership
from tracker.services import CommentService


def _url(path):
    return f"/api/tracker/{path}"


# ---- Authentication

@pytest.mark.django_db
def test_request_without_identity_is_unauthorized(project):
    response = APIClient().get(_url("projects/"))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
def test_identity_comes_from_gateway_header(project, alice):
    client = APIClient()
    client.credentials(HTTP_X_USER_ID=str(alice))

    response = client.get(_url("projects/"))

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["count"] == 1


@pytest.mark.django_db
def test_malformed_user_header_is_rejected(db):
    client = APIClient()
    client.credentials(HTTP_X_USER_ID="not-a-uuid")

    assert client.get(_url("projects/")).status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
def test_gateway_token_is_enforced_when_configured(settings, project, alice):
    settings.TRACKER_GATEWAY_TOKEN = "s3cret"
    client = APIClient()

    client.credentials(HTTP_X_USER_ID=str(alice))
    assert client.get(_url("projects/")).status_code == status.HTTP_401_UNAUTHORIZED

    client.credentials(HTTP_X_USER_ID=str(alice), HTTP_X_GATEWAY_TOKEN="caf\u00e9")
    assert client.get(_url("projects/")).status_code == status.HTTP_401_UNAUTHORIZED

    client.credentials(HTTP_X_USER_ID=str(alice), HTTP_X_GATEWAY_TOKEN="s3cret")
    assert client.get(_url("projects/")).status_code == status.HTTP_200_OK


# ---- Projects

@pytest.mark.django_db
def test_project_list_carries_counts(api_client, ticket, alice, carol):
    response = api_client(alice).get(_url("projects/"))

    assert response.status_code == status.HTTP_200_OK
    [row] = response.json()["results"]
    assert row["name"] == "Checkout Bugs"
    assert row["owner_id"] == str(alice)
    assert row["ticket_count"] == 1
    assert row["member_count"] == 1

    assert api_client(carol).get(_url("projects/")).json()["count"] == 0


@pytest.mark.django_db
def test_create_project(api_client, carol):
    response = api_client(carol).post(_url("projects/"), {"name": "Mobile App"}, format="json")

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["owner_id"] == str(carol)


@pytest.mark.django_db
def test_create_project_requires_name(api_client, carol):
    response = api_client(carol).post(_url("projects/"), {"name": "  "}, format="json")

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
def test_project_delete_flow(api_client, project, ticket, alice, bob):
    url = _url(f"projects/{project.id}/")

    assert api_client(bob).delete(url).status_code == status.HTTP_403_FORBIDDEN
    assert api_client(alice).delete(url).status_code == status.HTTP_204_NO_CONTENT
    assert api_client(bob).get(url).status_code == status.HTTP_404_NOT_FOUND
    assert api_client(bob).get(_url(f"tickets/{ticket.id}/")).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
def test_board_groups_tickets_by_status(api_client, project, assigned_ticket, bob):
    api_client(bob).patch(_url(f"tickets/{assigned_ticket.id}/"), {"status": "in_progress"}, format="json")

    response = api_client(bob).get(_url(f"projects/{project.id}/board/"))

    assert response.status_code == status.HTTP_200_OK
    board = response.json()
    assert board["todo"] == []
    assert [t["id"] for t in board["in_progress"]] == [str(assigned_ticket.id)]
    assert board["done"] == []


# ---- Not found vs no access

@pytest.mark.django_db
def test_outsider_sees_same_404_as_missing_ticket(api_client, ticket, carol):
    client = api_client(carol)

    hidden = client.get(_url(f"tickets/{ticket.id}/"))
    missing = client.get(_url(f"tickets/{uuid.uuid4()}/"))

    assert hidden.status_code == missing.status_code == status.HTTP_404_NOT_FOUND
    assert hidden.json() == missing.json()


@pytest.mark.django_db
def test_outsider_write_is_404(api_client, project, ticket, carol):
    client = api_client(carol)

    assert client.patch(_url(f"tickets/{ticket.id}/"), {"status": "done"}, format="json").status_code == 404
    assert client.delete(_url(f"projects/{project.id}/")).status_code == 404
    response = client.post(_url("tickets/"), {"project_id": str(project.id), "title": "x"}, format="json")
    assert response.status_code == 404


# ---- Tickets

@pytest.mark.django_db
def test_create_ticket_over_http(api_client, project, bob_membership, bob):
    response = api_client(bob).post(
        _url("tickets/"),
        {"project_id": str(project.id), "title": "Coupon ignored", "type": "bug", "priority": "high"},
        format="json",
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["type"] == "bug"
    assert data["priority"] == "high"
    assert data["status"] == "todo"
    assert data["reporter_id"] == str(bob)


@pytest.mark.django_db
def test_create_ticket_rejects_unknown_type(api_client, project, bob_membership, bob):
    response = api_client(bob).post(
        _url("tickets/"), {"project_id": str(project.id), "title": "x", "type": "epic"}, format="json"
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
def test_ticket_list_filters(api_client, project, ticket, bob):
    client = api_client(bob)

    assert client.get(_url("tickets/"), {"type": "bug"}).json()["count"] == 1
    assert client.get(_url("tickets/"), {"type": "feature"}).json()["count"] == 0
    assert client.get(_url("tickets/"), {"search": "declined"}).json()["count"] == 1
    assert client.get(_url("tickets/"), {"project_id": str(project.id), "status": "done"}).json()["count"] == 0


@pytest.mark.django_db
def test_status_patch_requires_assignee_or_owner(api_client, ticket, alice, bob):
    url = _url(f"tickets/{ticket.id}/")

    assert api_client(bob).patch(url, {"status": "done"}, format="json").status_code == status.HTTP_403_FORBIDDEN

    response = api_client(alice).patch(url, {"assignee_id": str(bob)}, format="json")
    assert response.status_code == status.HTTP_200_OK

    response = api_client(bob).patch(url, {"status": "done"}, format="json")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "done"


@pytest.mark.django_db
def test_history_endpoint(api_client, assigned_ticket, bob):
    api_client(bob).patch(_url(f"tickets/{assigned_ticket.id}/"), {"status": "done"}, format="json")

    response = api_client(bob).get(_url(f"tickets/{assigned_ticket.id}/history/"))

    assert response.status_code == status.HTTP_200_OK
    fields = [entry["field_name"] for entry in response.json()]
    assert fields[0] == "status"
    assert "created" in fields


# ---- Members

@pytest.mark.django_db
def test_duplicate_invite_is_409(api_client, project, bob_membership, alice, bob):
    response = api_client(alice).post(
        _url(f"projects/{project.id}/members/"), {"user_id": str(bob)}, format="json"
    )

    assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
def test_invite_list_and_join(api_client, project, alice, carol, dave):
    response = api_client(alice).post(
        _url(f"projects/{project.id}/members/"), {"user_id": str(carol), "role": "viewer"}, format="json"
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["role"] == "viewer"

    response = api_client(dave).post(_url(f"projects/{project.id}/members/join/"), {}, format="json")
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["role"] == "developer"

    members = api_client(carol).get(_url(f"projects/{project.id}/members/")).json()
    assert {m["user_id"] for m in members} == {str(carol), str(dave)}


@pytest.mark.django_db
def test_member_detail_is_owner_only(api_client, bob_membership, alice, bob):
    url = _url(f"members/{bob_membership.id}/")

    assert api_client(bob).patch(url, {"role": "admin"}, format="json").status_code == status.HTTP_403_FORBIDDEN

    response = api_client(alice).patch(url, {"role": "admin"}, format="json")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["role"] == "admin"

    assert api_client(alice).delete(url).status_code == status.HTTP_204_NO_CONTENT
    assert not Membership.objects.filter(pk=bob_membership.pk).exists()


# ---- Comments

@pytest.mark.django_db
def test_comment_thread_over_http(api_client, ticket, alice, bob):
    comments_url = _url(f"tickets/{ticket.id}/comments/")

    parent = api_client(bob).post(comments_url, {"content": "Visa only"}, format="json")
    assert parent.status_code == status.HTTP_201_CREATED
    parent_id = parent.json()["id"]

    reply = api_client(alice).post(comments_url, {"content": "Which bank?", "parent_id": parent_id}, format="json")
    assert reply.status_code == status.HTTP_201_CREATED
    assert reply.json()["parent"] == parent_id

    listed = api_client(alice).get(comments_url).json()
    assert [c["id"] for c in listed] == [parent_id, reply.json()["id"]]

    response = api_client(bob).delete(_url(f"comments/{parent_id}/"))
    assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
def test_comment_edit_is_author_only(api_client, ticket, alice, bob):
    comment = CommentService.create_comment(ticket=ticket, user_id=bob, content="First!")
    url = _url(f"comments/{comment.id}/")

    assert api_client(alice).patch(url, {"content": "edited"}, format="json").status_code == status.HTTP_403_FORBIDDEN

    response = api_client(bob).patch(url, {"content": "edited"}, format="json")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["content"] == "edited"


# ---- Profile enrichment

@pytest.mark.django_db
def test_owner_profile_is_attached(api_client, project, alice):
    profile = {"id": str(alice), "display_name": "Alice", "handle": "alice"}

    with patch(
        "tracker.clients.user_client.UserServiceClient.get_users_by_ids",
        return_value={str(alice): profile},
    ):
        response = api_client(alice).get(_url(f"projects/{project.id}/"))

    assert response.json()["owner"] == profile


@pytest.mark.django_db
def test_join_response_carries_member_profile(api_client, project, carol):
    profile = {"id": str(carol), "display_name": "Carol", "handle": "carol"}

    with patch(
        "tracker.clients.user_client.UserServiceClient.get_users_by_ids",
        return_value={str(carol): profile},
    ):
        response = api_client(carol).post(_url(f"projects/{project.id}/members/join/"), {}, format="json")

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["user"] == profile
