from django.conf import settings
from django.conf.urls.static import static
from django.urls import include, path

from api.errors import error_response

urlpatterns = [
    path("api/", include("api.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)


def not_found(request, exception=None):
    return error_response("Route not found", 404)


def server_error(request):
    return error_response("Internal server error", 500)


handler404 = not_found
handler500 = server_error
