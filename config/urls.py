from django.contrib import admin
from django.urls import path, include

# API 경로는 기존 프런트엔드와 맞추기 위해 끝 슬래시 없이 사용
urlpatterns = [
    path('admin/', admin.site.urls),

    path('api/auth/', include('apps.accounts.urls')),
    path('api/', include('apps.databases.urls')),
    path('api/', include('apps.transactions.urls')),
    path('api/', include('apps.dashboard.urls')),
]
