"""Production settings.

Secrets and hosts must come from the environment or ``config/.env``.
"""

from decouple import Csv
from django.core.exceptions import ImproperlyConfigured

from server.settings.components import config
from server.settings.components.common import SECRET_KEY

DEBUG = False

ALLOWED_HOSTS = config('DJANGO_ALLOWED_HOSTS', cast=Csv())

if not SECRET_KEY:
    raise ImproperlyConfigured('DJANGO_SECRET_KEY must be set in production')

SESSION_COOKIE_SECURE = True

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
