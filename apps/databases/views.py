from django.db import IntegrityError, transaction
from django.views.decorators.http import require_http_methods, require_POST
import logging

from apps.accounts.tokens import token_required
from apps.core.api import InvalidRequestBody, api_error, api_success, first_form_error, parse_json_body
from .connector import check_connection
from .forms import ConnectionTestForm, TenantDatabaseForm, TenantDatabaseUpdateForm
from .models import TenantDatabase

logger = logging.getLogger(__name__)


# =============================================================================
# Helper 함수
# =============================================================================

def get_user_database(request, pk):
    """본인 소유 DB 만 조회 (비활성 포함), 없으면 None"""
    database = TenantDatabase.objects.filter(pk=pk).first()
    if database is None or not database.is_owner(request.auth_user['id']):
        return None
    return database


def _not_found():
    return api_error('ไม่พบ Database', status=404)


def _connection_failed(result):
    return api_error(f"เชื่อมต่อไม่ได้: {result['error']}", status=400)


# =============================================================================
# 목록 / 등록
# =============================================================================

@token_required
@require_http_methods(['GET', 'POST'])
def database_collection(request):
    if request.method == 'POST':
        return database_create(request)
    return database_list(request)


def database_list(request):
    """
    DB 목록 조회

    - 본인의 활성 DB 만 (이름순)
    - 접속 정보는 마스킹
    """
    try:
        databases = TenantDatabase.active.filter(user_id=request.auth_user['id']).order_by('name')
        return api_success(databases=[db.to_safe_dict() for db in databases])
    except Exception as e:
        logger.error(f"DB 목록 조회 실패: user_id={request.auth_user['id']}, error={e}", exc_info=True)
        return api_error('Failed to fetch databases', status=500)


def database_create(request):
    """
    DB 등록

    - 폼 검증
    - 저장 전에 연결 테스트 (실패 시 400)
    - db_name / table_name 은 고정값
    """
    try:
        data = parse_json_body(request)
    except InvalidRequestBody as e:
        return api_error(str(e), status=400)

    form = TenantDatabaseForm(data)
    if not form.is_valid():
        return api_error(first_form_error(form), status=400)

    database = form.save(commit=False)
    database.user_id = request.auth_user['id']

    result = check_connection(database)
    if not result['success']:
        return _connection_failed(result)

    try:
        with transaction.atomic():
            database.save()
            database.mark_connected()
    except IntegrityError as e:
        logger.error(f"DB 등록 실패 (무결성 제약): user_id={request.auth_user['id']}, error={e}")
        return api_error('เกิดข้อผิดพลาดในการเพิ่ม database', status=400)
    except Exception as e:
        logger.error(f"DB 등록 중 예상치 못한 오류: user_id={request.auth_user['id']}, error={e}", exc_info=True)
        return api_error('Failed to add database', status=500)

    logger.info(f"DB 등록: {database.name} (ID: {database.pk}) - 사용자: {request.auth_user['username']}")
    return api_success(message='เพิ่ม Database สำเร็จ', id=database.pk)


@token_required
@require_POST
def database_test_adhoc(request):
    """저장 전 연결 테스트 (결과는 항상 200)"""
    try:
        data = parse_json_body(request)
    except InvalidRequestBody as e:
        return api_error(str(e), status=400)

    form = ConnectionTestForm(data)
    if not form.is_valid():
        return api_error(first_form_error(form), status=400)

    result = check_connection(form.build_database())
    if not result['success']:
        return api_error(result['error'], status=200)

    return api_success(message='เชื่อมต่อสำเร็จ')


# =============================================================================
# 상세 / 수정 / 삭제
# =============================================================================

@token_required
@require_http_methods(['GET', 'PUT', 'DELETE'])
def database_item(request, pk):
    if request.method == 'PUT':
        return database_update(request, pk)
    if request.method == 'DELETE':
        return database_delete(request, pk)
    return database_detail(request, pk)


def database_detail(request, pk):
    database = get_user_database(request, pk)
    if database is None:
        return _not_found()

    return api_success(database=database.to_safe_dict())


def database_update(request, pk):
    """
    DB 수정

    - 접속 정보(host/db_user/db_password/port)가 바뀌면 먼저 연결 테스트
    - 변경할 내용이 없으면 400
    """
    database = get_user_database(request, pk)
    if database is None:
        return _not_found()

    try:
        data = parse_json_body(request)
    except InvalidRequestBody as e:
        return api_error(str(e), status=400)

    form = TenantDatabaseUpdateForm(data)
    if not form.is_valid():
        return api_error(first_form_error(form), status=400)

    changes = form.get_changes()
    if not changes:
        return api_error('ไม่มีข้อมูลที่จะอัพเดท', status=400)

    for field, value in changes.items():
        setattr(database, field, value)

    if form.touches_connection(changes):
        result = check_connection(database)
        if not result['success']:
            return _connection_failed(result)

    try:
        database.save(update_fields=[*changes.keys(), 'updated_at'])
    except Exception as e:
        logger.error(f"DB 수정 중 예상치 못한 오류: database_id={pk}, error={e}", exc_info=True)
        return api_error('เกิดข้อผิดพลาดในการอัพเดท database', status=500)

    logger.info(f"DB 수정: {database.name} (ID: {pk}) - 변경: {', '.join(sorted(changes))}")
    return api_success(message='อัพเดท Database สำเร็จ')


def database_delete(request, pk):
    """DB 등록 삭제 (영구 삭제)"""
    database = get_user_database(request, pk)
    if database is None:
        return _not_found()

    database_name = database.name
    database.delete()

    logger.info(f"DB 삭제: {database_name} (ID: {pk})")
    return api_success(message='ลบ Database สำเร็จ')


@token_required
@require_POST
def database_test(request, pk):
    """등록된 DB 연결 테스트"""
    database = get_user_database(request, pk)
    if database is None:
        return _not_found()

    result = check_connection(database)
    if result['success']:
        return api_success()
    return api_error(result['error'], status=200)
