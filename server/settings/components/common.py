"""Django settings shared by every environment.

For the full list of settings and their config, see
https://docs.djangoproject.com/en/5.1/ref/settings/
"""

from typing import Final

from decouple import Csv

from server.settings.components import BASE_DIR, config

SECRET_KEY = config('DJANGO_SECRET_KEY', default='')

# Previous secrets; session tokens signed with them keep resolving.
SECRET_KEY_FALLBACKS = config(
    'DJANGO_SECRET_KEY_FALLBACKS',
    cast=Csv(),
    default='',
)

INSTALLED_APPS: Final = (
    'server.apps.accounts',
    'server.apps.files',
)

MIDDLEWARE: Final = (
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'server.apps.common.middleware.ServiceErrorMiddleware',
)

ROOT_URLCONF = 'server.urls'

WSGI_APPLICATION = 'server.wsgi.application'

# Routes are matched exactly, `/files` and `/files/` are not the same.
APPEND_SLASH = False

# Database
# https://docs.djangoproject.com/en/5.1/ref/settings/#databases

DATABASES = {
    'default': {
        'ENGINE': config(
            'DJANGO_DATABASE_ENGINE',
            default='django.db.backends.sqlite3',
        ),
        'NAME': config(
            'DJANGO_DATABASE_NAME',
            default=str(BASE_DIR.joinpath('db.sqlite3')),
        ),
        'USER': config('DJANGO_DATABASE_USER', default=''),
        'PASSWORD': config('DJANGO_DATABASE_PASSWORD', default=''),
        'HOST': config('DJANGO_DATABASE_HOST', default=''),
        'PORT': config('DJANGO_DATABASE_PORT', default=''),
        'CONN_MAX_AGE': config('CONN_MAX_AGE', cast=int, default=60),
    },
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Internationalization
# https://docs.djangoproject.com/en/5.1/topics/i18n/

LANGUAGE_CODE = 'en-us'

USE_I18N = False

TIME_ZONE = 'UTC'
USE_TZ = True

# Password hashing
# https://docs.djangoproject.com/en/5.1/topics/auth/passwords/

PASSWORD_HASHERS: Final = (
    'server.apps.accounts.hashers.AccountPasswordHasher',
    'django.contrib.auth.hashers.BCryptSHA256PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
)

# Request body limits (bytes)

CREDENTIALS_BODY_LIMIT = config(
    'CREDENTIALS_BODY_LIMIT',
    cast=int,
    default=1024 * 1024,
)
FILE_UPLOAD_BODY_LIMIT = config(
    'FILE_UPLOAD_BODY_LIMIT',
    cast=int,
    default=100 * 1024 * 1024,
)

# Uploads larger than this are spooled to a temporary file on disk
FILE_UPLOAD_MAX_MEMORY_SIZE = 2621440  # 2.5 MB, Django's default

# Security
# https://docs.djangoproject.com/en/5.1/topics/security/

SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'
