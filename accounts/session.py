"""Per-request admin identity and sign-in/sign-out notifications.

Views never read a module-level "current user". They build an
``AdminContext`` from the request and hand it to whatever needs identity.
Session changes are observed through Django's auth signals; the receivers
are connected in ``AccountsConfig.ready`` and can be disconnected again with
``disconnect_session_receivers``.
"""

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from django.contrib.auth import user_logged_in, user_logged_out, user_login_failed
from django.contrib.auth.views import redirect_to_login
from django.http import HttpResponseForbidden, JsonResponse

from audit.models import AuditLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminContext:
    user_id: Optional[int]
    username: str
    email: str
    is_admin: bool

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def from_request(cls, request) -> "AdminContext":
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            return cls(user_id=None, username='', email='', is_admin=False)
        return cls(
            user_id=user.pk,
            username=user.get_username(),
            email=user.email or '',
            is_admin=bool(getattr(user, 'is_donation_admin', user.is_superuser)),
        )


def admin_required(view_func):
    """Allow only donation admins; anonymous users go to the login page."""

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        ctx = AdminContext.from_request(request)
        if not ctx.is_admin:
            if 'application/json' in request.headers.get('Accept', ''):
                return JsonResponse({'success': False, 'error': 'Permission denied'}, status=403)
            return HttpResponseForbidden("You do not have permission to manage donations")
        request.admin_context = ctx
        return view_func(request, *args, **kwargs)

    return _wrapped


def on_logged_in(sender, request, user, **kwargs):
    logger.info("Admin session started for %s", user.get_username())
    AuditLog.objects.create(user=user, action='Signed in', object_repr=user.get_username())


def on_logged_out(sender, request, user, **kwargs):
    # user is None when the session had already expired
    if user is None:
        return
    logger.info("Admin session ended for %s", user.get_username())
    AuditLog.objects.create(user=user, action='Signed out', object_repr=user.get_username())


def on_login_failed(sender, credentials, request=None, **kwargs):
    logger.warning("Failed sign-in attempt for %s", credentials.get('username', '<unknown>'))


_RECEIVERS = (
    (user_logged_in, on_logged_in, 'accounts.session.logged_in'),
    (user_logged_out, on_logged_out, 'accounts.session.logged_out'),
    (user_login_failed, on_login_failed, 'accounts.session.login_failed'),
)


def connect_session_receivers():
    for signal, receiver, uid in _RECEIVERS:
        signal.connect(receiver, dispatch_uid=uid)


def disconnect_session_receivers():
    for signal, receiver, uid in _RECEIVERS:
        signal.disconnect(receiver, dispatch_uid=uid)
