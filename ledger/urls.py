from django.urls import path
from . import views

app_name = 'ledger'

urlpatterns = [
    path('', views.transparency, name='transparency'),
    path('export/', views.export_ledger, name='export'),
    path('expenses/create/', views.expense_create, name='expense_create'),
]
