"""
사용자 프로필 관리

Django 기본 User 모델에 권한(role)과 계정 상태(status)를 추가합니다.
"""
from django.db import models
from django.contrib.auth.models import User

from apps.core.models import TimeStampedModel


class Profile(TimeStampedModel):
    """사용자 프로필 (Django User 확장)"""

    ROLE_CHOICES = [
        ('admin', '관리자'),
        ('user', '일반 사용자'),
    ]

    STATUS_CHOICES = [
        ('active', '정상'),
        ('inactive', '비활성'),
        ('banned', '정지'),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='user')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active', db_index=True)

    class Meta:
        db_table = 'profiles'

    def __str__(self):
        return f"{self.user.username} 프로필"

    @property
    def is_usable(self):
        """로그인/토큰 사용 가능 여부"""
        return self.status == 'active'
