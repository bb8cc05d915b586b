# ============================================
# tracker/urls.py
# ============================================
from django.urls import path
from tracker.views.project import (
    ProjectListCreateAPIView,
    ProjectDetailAPIView,
    ProjectBoardAPIView
)
from tracker.views.membership import (
    MemberListCreateAPIView,
    MemberJoinAPIView,
    MemberDetailAPIView
)
from tracker.views.ticket import (
    TicketListCreateAPIView,
    TicketDetailAPIView,
    TicketHistoryAPIView
)
from tracker.views.comment import (
    CommentListCreateAPIView,
    CommentDetailAPIView
)

app_name = 'tracker'

urlpatterns = [
    # Projects
    path('projects/', ProjectListCreateAPIView.as_view(), name='project-list-create'),
    path('projects/<uuid:project_id>/', ProjectDetailAPIView.as_view(), name='project-detail'),
    path('projects/<uuid:project_id>/board/', ProjectBoardAPIView.as_view(), name='project-board'),

    # Members
    path('projects/<uuid:project_id>/members/', MemberListCreateAPIView.as_view(), name='member-list-create'),
    path('projects/<uuid:project_id>/members/join/', MemberJoinAPIView.as_view(), name='member-join'),
    path('members/<uuid:membership_id>/', MemberDetailAPIView.as_view(), name='member-detail'),

    # Tickets
    path('tickets/', TicketListCreateAPIView.as_view(), name='ticket-list-create'),
    path('tickets/<uuid:ticket_id>/', TicketDetailAPIView.as_view(), name='ticket-detail'),
    path('tickets/<uuid:ticket_id>/history/', TicketHistoryAPIView.as_view(), name='ticket-history'),

    # Comments
    path('tickets/<uuid:ticket_id>/comments/', CommentListCreateAPIView.as_view(), name='comment-list-create'),
    path('comments/<uuid:comment_id>/', CommentDetailAPIView.as_view(), name='comment-detail'),
]
