from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password as run_password_validators
from django.core.exceptions import ValidationError as DjangoValidationError
from .models import User


def image_value(user):
    """Public id / URL of the user's image, '' when none is set."""
    if user.image is None:
        return ''
    return str(user.image) or ''


# ─── Register ─────────────────────────────────────────────────────────────────

class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True)

    class Meta:
        model  = User
        fields = ('name', 'email', 'password')
        extra_kwargs = {
            # uniqueness is reported by validate_email with the API's own wording
            'email': {'validators': []},
        }

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('User already exists')
        return value.lower()

    def validate_password(self, value):
        try:
            run_password_validators(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)


# ─── Read ─────────────────────────────────────────────────────────────────────

class UserSerializer(serializers.ModelSerializer):
    image = serializers.SerializerMethodField()

    class Meta:
        model  = User
        fields = ('id', 'name', 'email', 'image', 'is_staff', 'date_joined')
        read_only_fields = fields

    def get_image(self, obj):
        return image_value(obj)
