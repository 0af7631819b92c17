"""WSGI config for the file storage service.

It exposes the WSGI callable as a module-level variable named
``application``. Serve it with any WSGI server (gunicorn, cheroot, ...).
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'server.settings')

application = get_wsgi_application()
