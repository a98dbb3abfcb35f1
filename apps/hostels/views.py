# apps/hostels/views.py

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, F, Q
from django.utils.translation import gettext_lazy as _
from rest_framework import generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.exceptions import Conflict
from apps.core.mixins import HostelScopedMixin, SuperAdminMixin
from apps.users.models import UserRole

from . import services
from .models import Hostel, Floor, Room, Student, Warden, CleaningRequest
from .serializers import (
    HostelSerializer, FloorSerializer, RoomSerializer, OccupantSerializer,
    StudentSerializer, AssignRoomSerializer, WardenSerializer,
    CleaningRequestSerializer, CleaningTransitionSerializer,
    MyCleaningRequestSerializer
)

WARDEN = UserRole.Role.WARDEN
STAFF = UserRole.Role.STAFF
STUDENT = UserRole.Role.STUDENT

EVERYONE = (WARDEN, STAFF, STUDENT)
READERS = (WARDEN, STAFF)


def _is_true(value):
    return str(value).lower() in ('1', 'true', 'yes')


# Platform administration

class AdminHostelViewSet(SuperAdminMixin, viewsets.ModelViewSet):
    """
    CRUD for hostels, restricted to super admins.
    """
    queryset = Hostel.objects.all()
    serializer_class = HostelSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        search = self.request.query_params.get('search')
        is_active = self.request.query_params.get('is_active')

        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) |
                Q(code__icontains=search) |
                Q(city__icontains=search)
            )
        if is_active is not None:
            queryset = queryset.filter(is_active=_is_true(is_active))
        return queryset


# Hostel overview

class HostelDetailView(HostelScopedMixin, generics.RetrieveAPIView):
    """
    Details of the hostel in the URL, for anyone bound to it.
    """
    serializer_class = HostelSerializer
    role_permissions = {
        'default': EVERYONE,
    }

    def get_queryset(self):
        return Hostel.objects.filter(pk=self.get_hostel().pk)

    def get_object(self):
        return self.get_hostel()


class HostelStatsView(HostelScopedMixin, APIView):
    """
    Occupancy and cleaning workload figures.
    """
    role_permissions = {
        'default': READERS,
    }

    def get(self, request, hostel_pk=None):
        return Response(services.hostel_stats(self.get_hostel()))


# Floors and rooms

class FloorViewSet(HostelScopedMixin, viewsets.ModelViewSet):
    queryset = Floor.objects.all()
    serializer_class = FloorSerializer
    role_permissions = {
        'list': EVERYONE,
        'retrieve': EVERYONE,
        'default': (WARDEN,),
    }

    def perform_destroy(self, instance):
        if instance.rooms.exists():
            raise Conflict(_('Remove the rooms of this floor before deleting it.'))
        super().perform_destroy(instance)


class RoomViewSet(HostelScopedMixin, viewsets.ModelViewSet):
    """
    Rooms of a hostel, filterable by floor, activity and free beds.
    """
    queryset = Room.objects.select_related('floor')
    serializer_class = RoomSerializer
    role_permissions = {
        'list': EVERYONE,
        'retrieve': EVERYONE,
        'occupants': READERS,
        'default': (WARDEN,),
    }

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        floor = params.get('floor')
        is_active = params.get('is_active')
        available = params.get('available')

        if floor:
            queryset = queryset.filter(floor_id=floor)
        if is_active is not None:
            queryset = queryset.filter(is_active=_is_true(is_active))
        if available is not None:
            queryset = queryset.annotate(
                active_occupants=Count('occupants', filter=Q(occupants__is_active=True))
            )
            if _is_true(available):
                queryset = queryset.filter(active_occupants__lt=F('capacity'), is_active=True)
            else:
                queryset = queryset.filter(active_occupants__gte=F('capacity'))
        return queryset

    def perform_destroy(self, instance):
        if instance.occupancy:
            raise Conflict(_('Vacate the room before deleting it.'))
        if instance.cleaning_requests.exists():
            raise Conflict(_('Rooms with cleaning history cannot be deleted; deactivate the room instead.'))
        super().perform_destroy(instance)

    @action(detail=True, methods=['get'])
    def occupants(self, request, hostel_pk=None, pk=None):
        """Current residents of the room."""
        room = self.get_object()
        serializer = OccupantSerializer(room.get_current_residents(), many=True)
        return Response(serializer.data)


# Residents

class StudentViewSet(HostelScopedMixin, viewsets.ModelViewSet):
    """
    Student register of a hostel. Wardens manage it, staff can read it.
    """
    queryset = Student.objects.select_related('room', 'user')
    serializer_class = StudentSerializer
    role_permissions = {
        'list': READERS,
        'retrieve': READERS,
        'default': (WARDEN,),
    }

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        room = params.get('room')
        is_active = params.get('is_active')
        unassigned = params.get('unassigned')
        search = params.get('search')

        if room:
            queryset = queryset.filter(room_id=room)
        if is_active is not None:
            queryset = queryset.filter(is_active=_is_true(is_active))
        if unassigned is not None and _is_true(unassigned):
            queryset = queryset.filter(room__isnull=True)
        if search:
            queryset = queryset.filter(
                Q(full_name__icontains=search) |
                Q(roll_number__icontains=search) |
                Q(email__icontains=search)
            )
        return queryset

    def perform_create(self, serializer):
        super().perform_create(serializer)
        services.link_student_account(serializer.instance, actor=self.request.user, request=self.request)

    @transaction.atomic
    def perform_update(self, serializer):
        previous_user = serializer.instance.user
        if serializer.validated_data.get('is_active'):
            services.reserve_bed_for_reactivation(serializer.instance)
        super().perform_update(serializer)
        student = serializer.instance
        if previous_user is not None and previous_user != student.user:
            services.unlink_student_account(student, previous_user, actor=self.request.user, request=self.request)
        services.link_student_account(student, actor=self.request.user, request=self.request)

    def perform_destroy(self, instance):
        user = instance.user
        super().perform_destroy(instance)
        if user is not None:
            services.unlink_student_account(instance, user, actor=self.request.user, request=self.request)

    @action(detail=True, methods=['post'], url_path='assign-room')
    def assign_room(self, request, hostel_pk=None, pk=None):
        """Move the student into a room with a free bed."""
        student = self.get_object()
        serializer = AssignRoomSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)

        student = services.assign_room(
            student,
            serializer.validated_data['room'],
            actor=request.user,
            request=request
        )
        return Response(StudentSerializer(student, context=self.get_serializer_context()).data)

    @action(detail=True, methods=['post'])
    def vacate(self, request, hostel_pk=None, pk=None):
        """Release the student's bed."""
        student = services.vacate_room(self.get_object(), actor=request.user, request=request)
        return Response(StudentSerializer(student, context=self.get_serializer_context()).data)


class WardenViewSet(HostelScopedMixin, viewsets.ModelViewSet):
    """
    Wardens of a hostel. Appointing and dismissing wardens is reserved to
    super admins.
    """
    queryset = Warden.objects.select_related('user')
    serializer_class = WardenSerializer
    role_permissions = {
        'list': READERS,
        'retrieve': READERS,
        'default': (),
    }

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        user = data.pop('user')
        serializer.instance = services.appoint_warden(
            self.get_hostel(),
            user,
            actor=self.request.user,
            request=self.request,
            **data
        )

    def perform_destroy(self, instance):
        services.dismiss_warden(instance, actor=self.request.user, request=self.request)


# Cleaning workflow

class CleaningRequestViewSet(HostelScopedMixin, viewsets.ModelViewSet):
    """
    Cleaning requests of a hostel.

    Students only see and open requests for their own room. Requests are
    never deleted; they end as DONE or REJECTED.
    """
    queryset = CleaningRequest.objects.select_related('room', 'requested_by', 'assigned_to')
    serializer_class = CleaningRequestSerializer
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']
    role_permissions = {
        'list': EVERYONE,
        'retrieve': EVERYONE,
        'create': (WARDEN, STUDENT),
        'start': READERS,
        'complete': READERS,
        'reject': (WARDEN,),
        'default': (WARDEN,),
    }

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        if self.hostel_role == STUDENT:
            queryset = queryset.filter(
                Q(requested_by=self.request.user) |
                Q(student__user=self.request.user)
            )

        status_filter = params.get('status')
        room = params.get('room')
        priority = params.get('priority')

        if status_filter:
            queryset = queryset.filter(status=status_filter.upper())
        if room:
            queryset = queryset.filter(room_id=room)
        if priority:
            queryset = queryset.filter(priority=priority)
        return queryset

    def get_resident(self):
        return Student.objects.filter(
            hostel=self.get_hostel(),
            user=self.request.user,
            is_active=True
        ).select_related('room').first()

    def perform_create(self, serializer):
        data = serializer.validated_data
        student = None
        if self.hostel_role == STUDENT:
            student = self.get_resident()
            if student is None:
                raise ValidationError(_('You are not registered as a resident of this hostel.'))

        cleaning_request = services.create_cleaning_request(
            data['room'],
            self.request.user,
            student=student,
            description=data.get('description', ''),
            priority=data.get('priority', CleaningRequest.Priority.NORMAL),
            request=self.request
        )

        assigned_to = data.get('assigned_to')
        if assigned_to is not None and self.hostel_role != STUDENT:
            cleaning_request.assigned_to = assigned_to
            cleaning_request.save(update_fields=['assigned_to', 'updated_at'])

        serializer.instance = cleaning_request

    def _transition(self, request, status_value):
        serializer = CleaningTransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cleaning_request = services.transition_cleaning_request(
            self.get_object(),
            status_value,
            actor=request.user,
            request=request,
            reason=serializer.validated_data['reason'],
            notes=serializer.validated_data['notes']
        )
        return Response(self.get_serializer(cleaning_request).data)

    @action(detail=True, methods=['post'])
    def start(self, request, hostel_pk=None, pk=None):
        return self._transition(request, CleaningRequest.Status.IN_PROGRESS)

    @action(detail=True, methods=['post'])
    def complete(self, request, hostel_pk=None, pk=None):
        return self._transition(request, CleaningRequest.Status.DONE)

    @action(detail=True, methods=['post'])
    def reject(self, request, hostel_pk=None, pk=None):
        return self._transition(request, CleaningRequest.Status.REJECTED)


# Caller's own records

class MyRoomView(APIView):
    """
    The caller's student records with their room and roommates.
    """

    def get(self, request):
        records = Student.objects.filter(
            user=request.user,
            is_active=True
        ).select_related('hostel', 'room', 'room__floor')

        data = []
        for student in records:
            room = student.room
            data.append({
                'hostel': {
                    'id': str(student.hostel_id),
                    'name': student.hostel.name,
                    'code': student.hostel.code,
                },
                'student': StudentSerializer(student).data,
                'room': RoomSerializer(room).data if room else None,
                'roommates': OccupantSerializer(
                    room.get_current_residents().exclude(pk=student.pk), many=True
                ).data if room else [],
            })
        return Response(data)


class MyCleaningRequestView(generics.ListCreateAPIView):
    """
    List the caller's cleaning requests, or open one for the caller's room.
    """
    serializer_class = CleaningRequestSerializer

    def get_queryset(self):
        queryset = CleaningRequest.objects.filter(
            Q(requested_by=self.request.user) |
            Q(student__user=self.request.user)
        ).select_related('room', 'requested_by', 'assigned_to').distinct()

        status_filter = self.request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter.upper())
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = MyCleaningRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        residents = Student.objects.filter(
            user=request.user,
            is_active=True,
            room__isnull=False
        ).select_related('room')

        room = data.get('room')
        if room is not None:
            student = residents.filter(room=room).first()
            if student is None:
                raise ValidationError({'room': _('You can only request cleaning of your own room.')})
        else:
            if not residents.exists():
                raise ValidationError({'room': _('You do not hold a room in any hostel.')})
            if residents.count() > 1:
                raise ValidationError({'room': _('Specify which of your rooms needs cleaning.')})
            student = residents.first()

        cleaning_request = services.create_cleaning_request(
            student.room,
            request.user,
            student=student,
            description=data['description'],
            priority=data['priority'],
            request=request
        )
        output = CleaningRequestSerializer(cleaning_request, context=self.get_serializer_context())
        return Response(output.data, status=status.HTTP_201_CREATED)
