from django.urls import path
from . import views

app_name = 'dashboards'

urlpatterns = [
    path('', views.review, name='review'),
    path('donations/<int:pk>/verify/', views.verify_donation, name='verify_donation'),
    path('report.pdf', views.review_pdf, name='review_pdf'),
]
