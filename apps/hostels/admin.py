# apps/hostels/admin.py

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Hostel, Floor, Room, Student, Warden, CleaningRequest


class FloorInline(admin.TabularInline):
    model = Floor
    extra = 0
    fields = ['number', 'name']


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ['number', 'room_type', 'capacity', 'is_active']
    show_change_link = True


class OccupantInline(admin.TabularInline):
    model = Student
    fk_name = 'room'
    extra = 0
    fields = ['roll_number', 'full_name', 'check_in_date', 'is_active']
    readonly_fields = ['roll_number', 'full_name', 'check_in_date', 'is_active']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Hostel)
class HostelAdmin(admin.ModelAdmin):
    list_display = [
        'name', 'code', 'hostel_type', 'capacity', 'occupancy',
        'occupancy_percentage', 'is_active'
    ]
    list_filter = ['hostel_type', 'is_active']
    search_fields = ['name', 'code', 'city']
    list_editable = ['is_active']
    readonly_fields = ['capacity', 'occupancy', 'occupancy_percentage', 'created_at', 'updated_at']
    inlines = [FloorInline]

    fieldsets = (
        (_('Basic Information'), {
            'fields': ('name', 'code', 'hostel_type', 'description', 'rules')
        }),
        (_('Capacity'), {
            'fields': ('capacity', 'occupancy', 'occupancy_percentage')
        }),
        (_('Address & Contact'), {
            'fields': (
                'address_line_1', 'address_line_2', 'city',
                'state', 'postal_code', 'country',
                'phone', 'email', 'emergency_contact', 'emergency_phone'
            )
        }),
        (_('Status'), {
            'fields': ('is_active', 'created_at', 'updated_at')
        })
    )

    def occupancy_percentage(self, obj):
        return f"{obj.occupancy_percentage}%"
    occupancy_percentage.short_description = _('Occupancy %')


@admin.register(Floor)
class FloorAdmin(admin.ModelAdmin):
    list_display = ['number', 'name', 'hostel']
    list_filter = ['hostel']
    inlines = [RoomInline]


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = [
        'number', 'hostel', 'floor', 'room_type', 'capacity',
        'occupancy', 'available_beds', 'is_full', 'is_active'
    ]
    list_filter = ['hostel', 'room_type', 'is_active']
    search_fields = ['number', 'hostel__name']
    readonly_fields = ['occupancy', 'available_beds', 'is_full', 'created_at', 'updated_at']
    inlines = [OccupantInline]

    def is_full(self, obj):
        return obj.is_full
    is_full.boolean = True
    is_full.short_description = _('Full')

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('hostel', 'floor')


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ['roll_number', 'full_name', 'hostel', 'room', 'check_in_date', 'is_active']
    list_filter = ['hostel', 'is_active']
    search_fields = ['roll_number', 'full_name', 'email', 'user__email']
    raw_id_fields = ['user', 'room']
    date_hierarchy = 'check_in_date'


@admin.register(Warden)
class WardenAdmin(admin.ModelAdmin):
    list_display = ['user', 'hostel', 'employee_id', 'is_chief', 'appointed_on']
    list_filter = ['hostel', 'is_chief']
    search_fields = ['user__email', 'user__first_name', 'user__last_name', 'employee_id']
    raw_id_fields = ['user']


@admin.register(CleaningRequest)
class CleaningRequestAdmin(admin.ModelAdmin):
    list_display = [
        'room', 'hostel', 'status', 'priority', 'requested_by',
        'assigned_to', 'created_at', 'completed_at'
    ]
    list_filter = ['hostel', 'status', 'priority']
    search_fields = ['room__number', 'description', 'requested_by__email']
    readonly_fields = ['status', 'started_at', 'completed_at', 'created_at', 'updated_at']
    raw_id_fields = ['room', 'requested_by', 'student', 'assigned_to']
    date_hierarchy = 'created_at'
