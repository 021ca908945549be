"""
프로젝트 공통 추상 모델

- TimeStampedModel: 생성/수정 시간 자동 추적
- SoftDeleteModel: 비활성화 (is_active) + Active Manager
- UserOwnedModel: 사용자 소유 리소스 (user FK + is_owner)
"""

from django.contrib.auth.models import User
from django.db import models


class TimeStampedModel(models.Model):
    """생성/수정 시간 자동 추적"""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class SoftDeleteManager(models.Manager):
    """활성 데이터만 조회하는 Manager"""

    def get_queryset(self):
        return super().get_queryset().filter(is_active=True)


class SoftDeleteModel(TimeStampedModel):
    """
    비활성화 지원 추상 모델

    사이트 DB 등록 정보처럼 "목록에서 숨기되 기록은 남겨야 하는" 데이터에 사용.
    영구 삭제는 일반 delete() 를 그대로 사용합니다.

    Fields:
        is_active: 활성 상태 (True: 사용 중, False: 숨김)

    Managers:
        objects: 모든 레코드
        active: 활성 레코드만 (is_active=True)
    """
    is_active = models.BooleanField(default=True, db_index=True)

    objects = models.Manager()  # 기본 매니저 (모든 레코드)
    active = SoftDeleteManager()    # 활성 레코드만

    class Meta:
        abstract = True

    def deactivate(self):
        """비활성화 (is_active=False)"""
        self.is_active = False
        self.save(update_fields=['is_active', 'updated_at'])

    def restore(self):
        """다시 활성화 (is_active=True)"""
        self.is_active = True
        self.save(update_fields=['is_active', 'updated_at'])


class UserOwnedModel(TimeStampedModel):
    """사용자 소유 리소스 (타임스탬프 포함)"""

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='%(class)s_set',
        db_index=True
    )

    class Meta:
        abstract = True

    def is_owner(self, user):
        """소유자 확인 (User 또는 사용자 id)"""
        return self.user_id == getattr(user, 'pk', user)
