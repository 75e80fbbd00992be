"""
One-time admin account bootstrap.

Runs as an explicit startup step (`python manage.py ensure_admin`), never as
a side effect of opening a database connection. Idempotent: the store is
checked for the admin email first, so repeated runs are no-ops.
"""
import logging

from django.conf import settings

from .models import User

logger = logging.getLogger(__name__)


def ensure_admin(name=None, email=None, password=None):
    """
    Find-or-create the admin user.

    Arguments default to the ADMIN_NAME / ADMIN_MAIL / ADMIN_PASSWORD settings.

    Returns:
        (user, created) tuple, or None when credentials are not configured.
    """
    name     = name if name is not None else settings.ADMIN_NAME
    email    = email if email is not None else settings.ADMIN_MAIL
    password = password if password is not None else settings.ADMIN_PASSWORD

    if not name or not email or not password:
        logger.info('Admin credentials not configured. Skipping admin initialization.')
        return None

    existing = User.objects.filter(email__iexact=email).first()
    if existing:
        logger.info('Admin user already exists: %s', existing.email)
        return existing, False

    admin = User.objects.create_superuser(email=email, password=password, name=name)
    logger.info('Admin user created successfully: %s', admin.email)
    return admin, True
