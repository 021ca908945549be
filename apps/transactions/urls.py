from django.urls import path
from . import views

app_name = 'transactions'

urlpatterns = [
    path('deposits', views.deposits, name='deposits'),
    path('deposits/export', views.deposits_export, name='deposits_export'),
]
