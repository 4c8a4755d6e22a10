# core/serializers.py - DRF Serializers for domain objects
from rest_framework import serializers

from .constants import country_flag
from .utils import last_active_display


class SortedSkillsField(serializers.Field):

    def to_representation(self, value):
        return sorted(value)


class WorkerSerializer(serializers.Serializer):
    id = serializers.CharField()
    user_id = serializers.CharField()
    name = serializers.CharField()
    avatar = serializers.CharField(allow_null=True)
    country = serializers.CharField()
    country_code = serializers.CharField()
    flag = serializers.SerializerMethodField()
    headline = serializers.CharField()
    skills = SortedSkillsField()
    hourly_rate_min = serializers.DecimalField(max_digits=6, decimal_places=2)
    hourly_rate_max = serializers.DecimalField(max_digits=6, decimal_places=2)
    availability_hours = serializers.IntegerField()
    availability_type = serializers.CharField()
    bio = serializers.CharField()
    last_active = serializers.DateTimeField()
    last_active_display = serializers.SerializerMethodField()
    is_verified = serializers.BooleanField()
    review_count = serializers.IntegerField()
    average_rating = serializers.DecimalField(max_digits=3, decimal_places=2)

    def get_flag(self, obj):
        return country_flag(obj.country_code)

    def get_last_active_display(self, obj):
        return last_active_display(obj.last_active)


class EmployerSerializer(serializers.Serializer):
    id = serializers.CharField()
    user_id = serializers.CharField()
    company_name = serializers.CharField()
    avatar = serializers.CharField(allow_null=True)
    country = serializers.CharField()
    country_code = serializers.CharField()
    bio = serializers.CharField()


class JobSerializer(serializers.Serializer):
    id = serializers.CharField()
    employer_id = serializers.CharField()
    employer_name = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    skills = SortedSkillsField()
    hourly_rate_min = serializers.DecimalField(max_digits=6, decimal_places=2)
    hourly_rate_max = serializers.DecimalField(max_digits=6, decimal_places=2)
    availability_hours = serializers.IntegerField()
    country_preference = serializers.CharField(allow_null=True)
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class ReviewSerializer(serializers.Serializer):
    id = serializers.CharField()
    worker_id = serializers.CharField()
    employer_id = serializers.CharField()
    employer_name = serializers.CharField()
    rating = serializers.IntegerField()
    comment = serializers.CharField()
    created_at = serializers.DateTimeField()


class ConversationSerializer(serializers.Serializer):
    id = serializers.CharField()
    worker_id = serializers.CharField()
    employer_id = serializers.CharField()
    worker_name = serializers.CharField()
    employer_name = serializers.CharField()
    last_message = serializers.CharField()
    last_message_at = serializers.DateTimeField(allow_null=True)
    unread_count = serializers.IntegerField()


class MessageSerializer(serializers.Serializer):
    id = serializers.CharField()
    conversation_id = serializers.CharField()
    sender_id = serializers.CharField()
    content = serializers.CharField()
    created_at = serializers.DateTimeField()
    is_read = serializers.BooleanField()
