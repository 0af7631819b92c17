"""URL routes for files app."""

from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    path('files', views.file_list, name='list'),
    path('files/<str:filename>', views.file_detail, name='detail'),
]
