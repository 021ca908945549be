from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    path('dashboard', views.overview, name='overview'),
    path('health', views.health, name='health'),
]
