"""Main URL mapping configuration file.

Every app keeps its own ``urls.py`` with the routes it serves.
Error handlers answer with JSON bodies like the API views do.
"""

from django.urls import include, path

urlpatterns = [
    path('', include('server.apps.accounts.urls')),
    path('', include('server.apps.files.urls')),
]

handler400 = 'server.apps.common.views.bad_request'
handler403 = 'server.apps.common.views.permission_denied'
handler404 = 'server.apps.common.views.not_found'
handler500 = 'server.apps.common.views.server_error'
