# apps/hostels/serializers.py

from django.contrib.auth import get_user_model
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from apps.core.serializers import HostelScopedRelatedField, ModelCleanSerializer
from apps.users.models import UserRole

from .models import Hostel, Floor, Room, Student, Warden, CleaningRequest

User = get_user_model()


class HostelSerializer(ModelCleanSerializer):
    """
    Serializer for Hostel model.
    """
    capacity = serializers.IntegerField(read_only=True)
    occupancy = serializers.IntegerField(read_only=True)
    occupancy_percentage = serializers.FloatField(read_only=True)

    class Meta:
        model = Hostel
        fields = [
            'id', 'name', 'code', 'hostel_type', 'description', 'rules',
            'address_line_1', 'address_line_2', 'city', 'state', 'postal_code', 'country',
            'phone', 'email', 'emergency_contact', 'emergency_phone',
            'is_active', 'capacity', 'occupancy', 'occupancy_percentage',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_code(self, value):
        value = value.lower()
        queryset = Hostel.objects.filter(code=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError(_('A hostel with this code already exists.'))
        return value


class FloorSerializer(ModelCleanSerializer):
    room_count = serializers.SerializerMethodField()

    class Meta:
        model = Floor
        fields = ['id', 'hostel', 'number', 'name', 'room_count', 'created_at', 'updated_at']
        read_only_fields = ['id', 'hostel', 'created_at', 'updated_at']

    def get_room_count(self, obj):
        return obj.rooms.count()


class RoomSerializer(ModelCleanSerializer):
    """
    Serializer for Room model with live occupancy figures.
    """
    floor = HostelScopedRelatedField(queryset=Floor.objects.all())
    floor_number = serializers.IntegerField(source='floor.number', read_only=True)
    occupancy = serializers.IntegerField(read_only=True)
    available_beds = serializers.IntegerField(read_only=True)
    is_full = serializers.BooleanField(read_only=True)

    class Meta:
        model = Room
        fields = [
            'id', 'hostel', 'floor', 'floor_number', 'number', 'room_type',
            'capacity', 'occupancy', 'available_beds', 'is_full',
            'is_active', 'notes', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'hostel', 'created_at', 'updated_at']


class OccupantSerializer(serializers.ModelSerializer):
    class Meta:
        model = Student
        fields = ['id', 'roll_number', 'full_name', 'check_in_date']
        read_only_fields = fields


class StudentSerializer(ModelCleanSerializer):
    """
    Serializer for Student model. The room is changed only through the
    assign-room and vacate actions, which enforce capacity.
    """
    user = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        required=False,
        allow_null=True
    )
    room_number = serializers.CharField(source='room.number', read_only=True, default=None)

    class Meta:
        model = Student
        fields = [
            'id', 'hostel', 'user', 'roll_number', 'full_name', 'email', 'phone',
            'guardian_name', 'guardian_phone', 'room', 'room_number',
            'check_in_date', 'check_out_date', 'is_active',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'hostel', 'room', 'check_out_date', 'created_at', 'updated_at']

    def validate_user(self, value):
        hostel = self.context.get('hostel')
        if value is None or hostel is None:
            return value
        binding = UserRole.objects.filter(user=value, hostel=hostel).first()
        if binding and binding.role != UserRole.Role.STUDENT:
            raise serializers.ValidationError(
                _('User already holds the %(role)s role in this hostel.') % {
                    'role': binding.get_role_display()
                }
            )
        return value


class AssignRoomSerializer(serializers.Serializer):
    room = HostelScopedRelatedField(queryset=Room.objects.all())


class WardenSerializer(ModelCleanSerializer):
    user = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    user_email = serializers.EmailField(source='user.email', read_only=True)
    user_name = serializers.CharField(source='user.display_name', read_only=True)

    class Meta:
        model = Warden
        fields = [
            'id', 'hostel', 'user', 'user_email', 'user_name',
            'employee_id', 'phone', 'is_chief', 'appointed_on',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'hostel', 'created_at', 'updated_at']

    def validate(self, attrs):
        if self.instance is not None and 'user' in attrs and attrs['user'] != self.instance.user:
            raise serializers.ValidationError({'user': _('The warden account cannot be changed.')})
        return super().validate(attrs)


class CleaningRequestSerializer(ModelCleanSerializer):
    """
    Serializer for CleaningRequest model. Status and workflow timestamps are
    read-only; they change only through the start/complete/reject actions.
    """
    check_constraints = False

    room = HostelScopedRelatedField(queryset=Room.objects.all())
    room_number = serializers.CharField(source='room.number', read_only=True)
    requested_by_email = serializers.EmailField(source='requested_by.email', read_only=True, default=None)
    assigned_to = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        required=False,
        allow_null=True
    )

    class Meta:
        model = CleaningRequest
        fields = [
            'id', 'hostel', 'room', 'room_number', 'requested_by', 'requested_by_email',
            'student', 'description', 'priority', 'status', 'assigned_to',
            'started_at', 'completed_at', 'rejection_reason', 'resolution_notes',
            'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'hostel', 'requested_by', 'student', 'status',
            'started_at', 'completed_at', 'rejection_reason', 'resolution_notes',
            'created_at', 'updated_at',
        ]

    def validate_room(self, value):
        if self.instance is not None and value != self.instance.room:
            raise serializers.ValidationError(_('The room of a request cannot be changed.'))
        return value

    def validate_assigned_to(self, value):
        hostel = self.context.get('hostel')
        if value is None or hostel is None:
            return value
        allowed = (UserRole.Role.WARDEN, UserRole.Role.STAFF)
        if not UserRole.objects.filter(user=value, hostel=hostel, role__in=allowed).exists():
            raise serializers.ValidationError(_('Requests can only be assigned to wardens or staff of this hostel.'))
        return value


class CleaningTransitionSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class MyCleaningRequestSerializer(serializers.Serializer):
    """
    Payload for a student opening a request for their own room.
    """
    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all(), required=False)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    priority = serializers.ChoiceField(
        choices=CleaningRequest.Priority.choices,
        default=CleaningRequest.Priority.NORMAL
    )
