from django.conf import settings

from .session import AdminContext


def admin_context(request):
    return {
        'admin_context': AdminContext.from_request(request),
        'site_name': settings.SITE_NAME,
    }
