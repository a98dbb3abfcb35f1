import copy

from rest_framework import serializers


class ModelCleanSerializer(serializers.ModelSerializer):
    """
    ModelSerializer that runs the model's ``clean()`` and constraint checks
    during validation, so invariants declared on the model surface as
    VAL_400 errors instead of database errors.

    For hostel-owned models the hostel comes from the serializer context,
    never from the payload.
    """

    check_constraints = True

    def build_candidate(self, attrs):
        instance = copy.copy(self.instance) if self.instance is not None else self.Meta.model()
        for field, value in attrs.items():
            setattr(instance, field, value)

        hostel = self.context.get('hostel')
        if hostel is not None and hasattr(instance, 'hostel_id') and not instance.hostel_id:
            instance.hostel = hostel
        return instance

    def validate(self, attrs):
        attrs = super().validate(attrs)
        instance = self.build_candidate(attrs)
        instance.clean()
        if self.check_constraints:
            instance.validate_constraints()
        return attrs


class HostelScopedRelatedField(serializers.PrimaryKeyRelatedField):
    """
    Primary key field restricted to objects of the hostel in the serializer
    context. Ids from other hostels are reported as unknown.
    """

    def get_queryset(self):
        queryset = super().get_queryset()
        hostel = self.context.get('hostel')
        if hostel is not None:
            queryset = queryset.filter(hostel=hostel)
        return queryset
