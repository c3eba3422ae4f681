from django.urls import path
from . import views

app_name = 'activities'

urlpatterns = [
    path('', views.timeline, name='timeline'),
    path('create/', views.activity_create, name='activity_create'),
]
