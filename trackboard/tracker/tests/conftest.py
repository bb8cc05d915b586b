import uuid

import pytest
from rest_framework.test import APIClient

from tracker.authentication import GatewayUser
from tracker.models import Membership
from tracker.services import MembershipService, ProjectService, TicketService


@pytest.fixture
def alice():
    return uuid.uuid4()

@pytest.fixture
def bob():
    return uuid.uuid4()

@pytest.fixture
def carol():
    return uuid.uuid4()

@pytest.fixture
def dave():
    return uuid.uuid4()

@pytest.fixture
def project(db, alice):
    # alice owns "Checkout Bugs"
    return ProjectService.create_project(user_id=alice, name="Checkout Bugs", description="Payment flow issues")

@pytest.fixture
def bob_membership(project, alice, bob):
    return MembershipService.add_member(project=project, user_id=alice, member_id=bob, role=Membership.Role.DEVELOPER)

@pytest.fixture
def dave_membership(project, alice, dave):
    return MembershipService.add_member(project=project, user_id=alice, member_id=dave, role=Membership.Role.VIEWER)

@pytest.fixture
def ticket(project, bob_membership, bob):
    return TicketService.create_ticket(
        project_id=project.id, user_id=bob, title="Card declined twice", ticket_type="bug"
    )

@pytest.fixture
def assigned_ticket(ticket, alice, bob):
    return TicketService.update_ticket(ticket=ticket, user_id=alice, assignee_id=bob)

@pytest.fixture
def api_client():
    def _client(user_id):
        client = APIClient()
        client.force_authenticate(user=GatewayUser(id=user_id))
        return client
    return _client
