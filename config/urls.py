from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include
from accounts import views as account_views
from ui import views as ui_views

urlpatterns = [
	path('', ui_views.home, name='home'),
	path('omega/', admin.site.urls, name='omega_admin'),
	path('login/', account_views.AdminLoginView.as_view(), name='login'),
	path('logout/', account_views.logout_view, name='logout'),

	# Public pages
	path('donate/', include('donations.urls')),
	path('transparency/', include('ledger.urls')),
	path('progress/', include('progress.urls')),
	path('timeline/', include('activities.urls')),

	# Admin review
	path('admin-panel/', include('dashboards.urls')),

	path('accounts/', include('accounts.urls')),
]

if settings.DEBUG:
	urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
