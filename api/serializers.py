import datetime

from rest_framework import serializers

from blog.constants import DEFAULT_POST_ICON, ICON_CLASSES, SLUG_PATTERN
from blog.utils import format_date


class PostSummarySerializer(serializers.Serializer):
    slug = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    date = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    tags = serializers.ListField(child=serializers.CharField(), read_only=True)
    icon = serializers.CharField(read_only=True)


class PostSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    slug = serializers.CharField(max_length=100, required=False, allow_blank=True)
    date = serializers.CharField(max_length=10, required=False, allow_blank=True)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    tags = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False, default=list
    )
    icon = serializers.ChoiceField(
        choices=sorted(ICON_CLASSES), required=False, default=DEFAULT_POST_ICON
    )
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)

    def validate_slug(self, value):
        if value and not SLUG_PATTERN.match(value):
            raise serializers.ValidationError(
                "Slug may only contain letters, numbers, hyphens or underscores."
            )
        return value

    def validate_date(self, value):
        if not value:
            return value
        try:
            return datetime.date.fromisoformat(format_date(value)).isoformat()
        except ValueError:
            raise serializers.ValidationError("Date must be in YYYY-MM-DD format.")

    def validate_tags(self, value):
        return [tag.strip() for tag in value if tag.strip()]


class PreviewSerializer(serializers.Serializer):
    content = serializers.CharField(allow_blank=True, trim_whitespace=False, max_length=200000)

