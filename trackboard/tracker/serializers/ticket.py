# ============================================
# tracker/serializers/ticket.py
# ============================================
from rest_framework import serializers

from tracker.models import Ticket, TicketHistory


class TicketCreateSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    type = serializers.ChoiceField(
        choices=Ticket.TicketType.choices,
        default=Ticket.TicketType.TASK,
        source='ticket_type'
    )
    priority = serializers.ChoiceField(
        choices=Ticket.Priority.choices,
        default=Ticket.Priority.MEDIUM
    )
    status = serializers.ChoiceField(
        choices=Ticket.Status.choices,
        default=Ticket.Status.TODO
    )
    assignee_id = serializers.UUIDField(required=False, allow_null=True)


class TicketUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=Ticket.TicketType.choices, required=False)
    priority = serializers.ChoiceField(choices=Ticket.Priority.choices, required=False)
    status = serializers.ChoiceField(choices=Ticket.Status.choices, required=False)
    assignee_id = serializers.UUIDField(required=False, allow_null=True)


class TicketOutputSerializer(serializers.ModelSerializer):
    assignee = serializers.SerializerMethodField()
    reporter = serializers.SerializerMethodField()

    class Meta:
        model = Ticket
        fields = [
            'id', 'project', 'title', 'description', 'type', 'priority',
            'status', 'assignee_id', 'assignee', 'reporter_id', 'reporter',
            'created_at', 'updated_at'
        ]

    def get_assignee(self, obj):
        return getattr(obj, 'assignee_data', None)

    def get_reporter(self, obj):
        return getattr(obj, 'reporter_data', None)


class TicketListOutputSerializer(serializers.ModelSerializer):
    """Lighter serializer for list and board views"""
    assignee = serializers.SerializerMethodField()

    class Meta:
        model = Ticket
        fields = [
            'id', 'project', 'title', 'type', 'priority', 'status',
            'assignee_id', 'assignee', 'reporter_id', 'created_at'
        ]

    def get_assignee(self, obj):
        assignee_data = getattr(obj, 'assignee_data', None)
        if assignee_data:
            return {'id': assignee_data['id'], 'display_name': assignee_data.get('display_name')}
        return None


class BoardOutputSerializer(serializers.Serializer):
    todo = TicketListOutputSerializer(many=True)
    in_progress = TicketListOutputSerializer(many=True)
    done = TicketListOutputSerializer(many=True)


class TicketHistoryOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = TicketHistory
        fields = ['id', 'user_id', 'field_name', 'old_value', 'new_value', 'created_at']
