import uuid
from unittest.mock import Mock, patch

import pytest
import requests
from django.core.cache import cache

from tracker.clients.user_client import UserServiceClient


@pytest.fixture
def user_service(settings):
    settings.USER_SERVICE_URL = "http://users.internal/api/"
    cache.clear()
    yield settings
    cache.clear()


def _response(payload):
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


def test_disabled_without_service_url(settings):
    settings.USER_SERVICE_URL = ""

    with patch("tracker.clients.user_client.requests.post") as post:
        assert UserServiceClient.get_users_by_ids([uuid.uuid4()]) == {}

    post.assert_not_called()


def test_no_ids_no_request(user_service):
    with patch("tracker.clients.user_client.requests.post") as post:
        assert UserServiceClient.get_users_by_ids([None, ""]) == {}

    post.assert_not_called()


def test_batch_fetch_is_cached(user_service):
    user_id = str(uuid.uuid4())
    payload = [{"id": user_id, "full_name": "Bob Builder", "username": "bob"}]

    with patch("tracker.clients.user_client.requests.post", return_value=_response(payload)) as post:
        first = UserServiceClient.get_users_by_ids([uuid.UUID(user_id)])
        second = UserServiceClient.get_users_by_ids([user_id])

    assert first == {user_id: {"id": user_id, "display_name": "Bob Builder", "handle": "bob"}}
    assert second == first
    post.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == "http://users.internal/api/users/batch"
    assert kwargs["json"] == {"ids": [user_id]}


def test_only_missing_ids_are_fetched(user_service):
    cached_id, new_id = str(uuid.uuid4()), str(uuid.uuid4())
    cache.set(
        f"{UserServiceClient.CACHE_PREFIX}{cached_id}",
        {"id": cached_id, "display_name": "Alice", "handle": "alice"},
    )
    payload = [{"id": new_id, "display_name": "Carol", "handle": "carol"}]

    with patch("tracker.clients.user_client.requests.post", return_value=_response(payload)) as post:
        users = UserServiceClient.get_users_by_ids([cached_id, new_id])

    assert set(users) == {cached_id, new_id}
    assert post.call_args.kwargs["json"] == {"ids": [new_id]}


def test_service_failure_degrades_to_cached_profiles(user_service):
    user_id = str(uuid.uuid4())

    with patch(
        "tracker.clients.user_client.requests.post",
        side_effect=requests.ConnectionError("connection refused"),
    ):
        assert UserServiceClient.get_users_by_ids([user_id]) == {}


def test_malformed_payload_is_ignored(user_service):
    with patch("tracker.clients.user_client.requests.post", return_value=_response([{"name": "no id"}])):
        assert UserServiceClient.get_users_by_ids([uuid.uuid4()]) == {}


@pytest.mark.parametrize('payload', [{"users": []}, [None], ["abc"], "abc", None])
def test_unexpected_payload_shape_degrades_to_no_profiles(user_service, payload):
    with patch("tracker.clients.user_client.requests.post", return_value=_response(payload)):
        assert UserServiceClient.get_users_by_ids([uuid.uuid4()]) == {}
