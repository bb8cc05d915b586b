# ============================================
# tracker/serializers/comment.py
# ============================================
from rest_framework import serializers

from tracker.models import Comment


class CommentCreateSerializer(serializers.Serializer):
    content = serializers.CharField()
    parent_id = serializers.UUIDField(required=False, allow_null=True)


class CommentUpdateSerializer(serializers.Serializer):
    content = serializers.CharField()


class CommentOutputSerializer(serializers.ModelSerializer):
    author = serializers.SerializerMethodField()

    class Meta:
        model = Comment
        fields = ['id', 'ticket', 'parent', 'author_id', 'author', 'content', 'created_at', 'updated_at']

    def get_author(self, obj):
        return getattr(obj, 'author_data', None)
