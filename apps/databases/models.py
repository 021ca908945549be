# =============================================================================
# databases/models.py - 사이트별 거래 DB 등록 정보
# =============================================================================

"""
사이트별 거래 DB 등록 정보

사용자는 외부 사이트(MySQL)마다 접속 정보를 하나씩 등록하고,
거래 조회/요약은 요청 시점에 apps.databases.connector 로 직접 연결합니다.
"""
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models
from django.utils import timezone

from apps.core.models import SoftDeleteModel, UserOwnedModel

MASK = '********'
DEFAULT_PORT = 3306

# 테이블명은 SQL 에 직접 들어가므로 식별자 형식만 허용
TABLE_NAME_VALIDATOR = RegexValidator(
    regex=r'^[A-Za-z0-9_]+$',
    message='ชื่อตารางต้องเป็นตัวอักษร ตัวเลข หรือ _ เท่านั้น',
)


def default_db_name():
    return settings.TENANT_DB_NAME


def default_table_name():
    return settings.TENANT_TABLE_NAME


class TenantDatabase(UserOwnedModel, SoftDeleteModel):
    """사이트 거래 DB (사용자별 다중 등록)"""

    name = models.CharField(max_length=100, db_index=True)
    note = models.TextField(blank=True, null=True)

    host = models.CharField(max_length=255)
    port = models.PositiveIntegerField(
        default=DEFAULT_PORT,
        validators=[MinValueValidator(1), MaxValueValidator(65535)],
    )
    db_user = models.CharField(max_length=100)
    db_password = models.CharField(max_length=255)

    # 등록 시 고정값 사용, 수정 불가
    db_name = models.CharField(max_length=64, default=default_db_name)
    table_name = models.CharField(max_length=64, default=default_table_name, validators=[TABLE_NAME_VALIDATOR])

    last_connected = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'user_databases'
        ordering = ['name']
        indexes = [
            models.Index(fields=['user', 'is_active', 'name'], name='user_db_owner_active_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def effective_db_name(self):
        return self.db_name or settings.TENANT_DB_NAME

    @property
    def effective_table_name(self):
        return self.table_name or settings.TENANT_TABLE_NAME

    def mark_connected(self):
        """연결 테스트 성공 시각 기록 (저장된 레코드만)"""
        if not self.pk:
            return
        self.last_connected = timezone.now()
        TenantDatabase.objects.filter(pk=self.pk).update(last_connected=self.last_connected)

    def to_safe_dict(self):
        """API 응답용 (접속 정보 마스킹)"""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'note': self.note,
            'host': MASK,
            'port': self.port,
            'db_user': MASK,
            'db_password': MASK,
            'db_name': self.db_name,
            'table_name': self.table_name,
            'is_active': self.is_active,
            'last_connected': self.last_connected,
            'created_at': self.created_at,
        }

    def to_summary_dict(self):
        """거래 조회 응답에 포함되는 최소 정보"""
        return {
            'id': self.id,
            'name': self.name,
            'note': self.note,
        }
