# apps/communication/serializers.py

from rest_framework import serializers

from apps.core.serializers import ModelCleanSerializer

from .models import Announcement


class AnnouncementSerializer(ModelCleanSerializer):
    """
    Serializer for Announcement model. Publication goes through the publish
    action, so ``is_published`` is only writable on creation.
    """
    author_name = serializers.CharField(source='author.display_name', read_only=True, default=None)
    is_active = serializers.BooleanField(read_only=True)

    class Meta:
        model = Announcement
        fields = [
            'id', 'hostel', 'title', 'body', 'priority', 'target_audience',
            'author', 'author_name', 'is_published', 'published_at',
            'expires_at', 'is_pinned', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'hostel', 'author', 'published_at', 'created_at', 'updated_at']

    def validate_is_published(self, value):
        if self.instance is not None and value != self.instance.is_published:
            raise serializers.ValidationError('Use the publish action to publish an announcement.')
        return value


class FeedAnnouncementSerializer(serializers.ModelSerializer):
    hostel_code = serializers.CharField(source='hostel.code', read_only=True)
    author_name = serializers.CharField(source='author.display_name', read_only=True, default=None)

    class Meta:
        model = Announcement
        fields = [
            'id', 'hostel', 'hostel_code', 'title', 'body', 'priority',
            'author_name', 'published_at', 'expires_at', 'is_pinned',
        ]
        read_only_fields = fields
