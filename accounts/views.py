from django.contrib import messages
from django.contrib.auth import logout
from django.contrib.auth import views as auth_views
from django.http import JsonResponse
from django.shortcuts import redirect

from .session import AdminContext


class AdminLoginView(auth_views.LoginView):
    template_name = 'registration/login.html'
    redirect_authenticated_user = True


def logout_view(request):
    """Sign out and return to the public home page."""
    logout(request)
    messages.info(request, 'You have been signed out.')
    return redirect('home')


def session_status(request):
    """Report the current session, mirroring what the navbar needs."""
    ctx = AdminContext.from_request(request)
    return JsonResponse({
        'authenticated': ctx.is_authenticated,
        'username': ctx.username,
        'email': ctx.email,
        'is_admin': ctx.is_admin,
    })
