"""
Upload checks shared by the upload endpoint and the builder's local
pre-flight check, so both sides reject exactly the same files.
"""
from django.conf             import settings
from django.core.exceptions  import ValidationError

INVALID_TYPE_MESSAGE = 'Invalid file type. Only images are allowed.'
TOO_LARGE_MESSAGE    = 'File size too large. Maximum size is 5MB.'


def validate_upload(content_type, size):
    """Raises ValidationError unless the declared type is allowed and size <= UPLOAD_MAX_SIZE."""
    if (content_type or '').lower() not in settings.UPLOAD_ALLOWED_TYPES:
        raise ValidationError(INVALID_TYPE_MESSAGE, code='invalid_type')
    if size > settings.UPLOAD_MAX_SIZE:
        raise ValidationError(TOO_LARGE_MESSAGE, code='too_large')
