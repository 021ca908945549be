"""
User-Profile 자동 연동 시그널

회원가입 시 User 가 생성되면 Profile(role=user, status=active) 을 자동 생성합니다.
"""

from django.db.models.signals import post_save
from django.dispatch import receiver
from django.contrib.auth.models import User
from .models import Profile


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """
    User 생성 시 Profile 자동 생성

    Example:
        user = User.objects.create_user(username='test')
        → Profile.objects.create(user=user) 자동 실행
    """
    if created:
        Profile.objects.get_or_create(user=instance)
