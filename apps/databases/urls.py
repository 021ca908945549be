from django.urls import path
from . import views

app_name = 'databases'

urlpatterns = [
    # 목록 / 등록
    path('databases', views.database_collection, name='database_collection'),
    # 저장 전 연결 테스트 (ID 경로보다 먼저)
    path('databases/test', views.database_test_adhoc, name='database_test_adhoc'),

    # 상세 / 수정 / 삭제 / 연결 테스트
    path('databases/<int:pk>', views.database_item, name='database_item'),
    path('databases/<int:pk>/test', views.database_test, name='database_test'),
]
