from django.urls import path
from . import views

app_name = 'progress'

urlpatterns = [
    path('', views.weekly_progress, name='weekly'),
    path('data/', views.weekly_progress_json, name='weekly_json'),
]
