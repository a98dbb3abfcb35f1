from rest_framework import serializers

from .models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    """
    Read-only representation of an audit entry.
    """
    actor_email = serializers.CharField(source='actor.email', read_only=True, default=None)
    hostel_code = serializers.CharField(source='hostel.code', read_only=True, default=None)

    class Meta:
        model = AuditLog
        fields = [
            'id', 'timestamp', 'action', 'model_name', 'object_id',
            'actor', 'actor_email', 'hostel', 'hostel_code',
            'details', 'ip_address', 'user_agent',
        ]
        read_only_fields = fields
