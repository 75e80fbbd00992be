"""
Django settings for core project.

Every deploy-specific value comes from the environment; a local `.env`
file is loaded first when present.
"""
import os
from datetime import timedelta
from pathlib  import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# ─── Core ─────────────────────────────────────────────────────────────────────

SECRET_KEY    = os.environ.get('DJANGO_SECRET_KEY', 'dev-insecure-change-me')
DEBUG         = _env_bool('DJANGO_DEBUG', default=True)
ALLOWED_HOSTS = [
    h.strip() for h in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')
    if h.strip()
]

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third-party
    'rest_framework',
    'rest_framework_simplejwt.token_blacklist',
    'cloudinary',

    # Local
    'users',
    'profiles',
    'portfolios',
    'uploads',
    'builder',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF     = 'core.urls'
WSGI_APPLICATION = 'core.wsgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]


# ─── Database ─────────────────────────────────────────────────────────────────

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME':   os.environ.get('DATABASE_PATH', str(BASE_DIR / 'db.sqlite3')),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ─── Auth ─────────────────────────────────────────────────────────────────────

AUTH_USER_MODEL = 'users.User'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
]

REST_FRAMEWORK = {
    # JWT first: unauthenticated requests get 401 with a WWW-Authenticate header
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'rest_framework_simplejwt.authentication.JWTAuthentication',
        'rest_framework.authentication.SessionAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.IsAuthenticated',
    ),
}

JWT_EXPIRES_IN_DAYS = int(os.environ.get('JWT_EXPIRES_IN', '30'))

SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME':  timedelta(days=JWT_EXPIRES_IN_DAYS),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=JWT_EXPIRES_IN_DAYS),
    'ROTATE_REFRESH_TOKENS':  False,
    'BLACKLIST_AFTER_ROTATION': True,
}

# Admin bootstrap (python manage.py ensure_admin)
ADMIN_NAME     = os.environ.get('ADMIN_NAME', '')
ADMIN_MAIL     = os.environ.get('ADMIN_MAIL', '')
ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', '')


# ─── I18N ─────────────────────────────────────────────────────────────────────

LANGUAGE_CODE = 'en-us'
TIME_ZONE     = 'UTC'
USE_I18N      = True
USE_TZ        = True


# ─── Static / Media ───────────────────────────────────────────────────────────

STATIC_URL = 'static/'
MEDIA_URL  = '/media/'
MEDIA_ROOT = os.environ.get('MEDIA_ROOT', str(BASE_DIR / 'media'))

# Reads CLOUDINARY_URL from the environment when set
CLOUDINARY_URL = os.environ.get('CLOUDINARY_URL', '')


# ─── Portfolio builder ────────────────────────────────────────────────────────

UPLOAD_MAX_SIZE      = 5 * 1024 * 1024
UPLOAD_ALLOWED_TYPES = (
    'image/jpeg',
    'image/jpg',
    'image/png',
    'image/webp',
    'image/gif',
)
UPLOAD_SUBDIR = 'uploads/portfolio-profile'

BUILDER_SAVE_DELAY    = 1.0    # seconds of quiet before an auto-save fires
PORTFOLIO_SLUG_LENGTH = 10
DEFAULT_TEMPLATE_ID   = 'minimal'


# ─── Logging ──────────────────────────────────────────────────────────────────

LOG_LEVEL = os.environ.get('DJANGO_LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style':  '{',
        },
    },
    'handlers': {
        'console': {
            'class':     'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level':    'WARNING',
    },
    'loggers': {
        app: {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False}
        for app in ('users', 'profiles', 'portfolios', 'uploads', 'builder')
    },
}
