# ============================================
# tracker/serializers/project.py
# ============================================
from rest_framework import serializers

from tracker.models import Membership, Project


class ProjectCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')


class ProjectUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)


class ProjectOutputSerializer(serializers.ModelSerializer):
    owner = serializers.SerializerMethodField()
    ticket_count = serializers.IntegerField(read_only=True, required=False)
    member_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'description', 'owner_id', 'owner',
            'ticket_count', 'member_count', 'created_at', 'updated_at'
        ]

    def get_owner(self, obj):
        return getattr(obj, 'owner_data', None)


class MemberInviteSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    role = serializers.ChoiceField(
        choices=Membership.Role.choices,
        default=Membership.Role.DEVELOPER
    )


class MemberJoinSerializer(serializers.Serializer):
    role = serializers.ChoiceField(
        choices=Membership.Role.choices,
        default=Membership.Role.DEVELOPER
    )


class MemberRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Membership.Role.choices)


class MemberOutputSerializer(serializers.ModelSerializer):
    user = serializers.SerializerMethodField()

    class Meta:
        model = Membership
        fields = ['id', 'project', 'user_id', 'user', 'role', 'invited_by', 'joined_at']

    def get_user(self, obj):
        return getattr(obj, 'user_data', None)
