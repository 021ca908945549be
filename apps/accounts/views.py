# Django 기본
from django.contrib.auth.models import User
from django.db import IntegrityError, transaction
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

# 기타
import logging

# 앱 내부
from apps.core.api import InvalidRequestBody, api_error, api_success, first_form_error, parse_json_body
from .forms import LoginForm, RegisterForm
from .models import Profile
from .tokens import build_session, generate_token, get_token_from_request, verify_token

logger = logging.getLogger(__name__)


def _login_response(user, status=200, **extra):
    """last_login 갱신 + 토큰 발급"""
    User.objects.filter(pk=user.pk).update(last_login=timezone.now())
    return api_success(
        status=status,
        token=generate_token(user),
        user=build_session(user),
        **extra,
    )


@csrf_exempt
@require_POST
def register(request):
    """
    회원가입
    - 검증 규칙은 RegisterForm 참고
    - 가입 즉시 로그인 처리 (토큰 반환)
    - Profile 자동 생성 (signals.py에서 처리)
    """
    try:
        data = parse_json_body(request)
    except InvalidRequestBody as e:
        return api_error(str(e), status=400)

    form = RegisterForm(data)
    if not form.is_valid():
        return api_error(first_form_error(form), status=400)

    try:
        with transaction.atomic():
            user = form.save()
    except IntegrityError as e:
        logger.error(f"회원가입 실패 (중복 데이터): {e}")
        return api_error('Username นี้ถูกใช้งานแล้ว', status=400)
    except Exception as e:
        logger.error(f"회원가입 중 예상치 못한 오류: {e}", exc_info=True)
        return api_error('เกิดข้อผิดพลาดในการสร้างบัญชี', status=500)

    logger.info(f"신규 회원가입: {user.username} (ID: {user.id}, Email: {user.email})")
    return _login_response(user, message='สมัครสมาชิกสำเร็จ')


@csrf_exempt
@require_POST
def login(request):
    """아이디 또는 이메일로 로그인"""
    try:
        data = parse_json_body(request)
    except InvalidRequestBody as e:
        return api_error(str(e), status=400)

    form = LoginForm(data)
    if not form.is_valid():
        if form.has_missing_fields():
            return api_error(first_form_error(form), status=400)
        return api_error(first_form_error(form), status=401)

    user = form.get_user()
    logger.info(f"로그인: {user.username} (ID: {user.id})")
    return _login_response(user)


@require_GET
def me(request):
    """토큰 사용자 최신 정보 (정지 여부 재확인)"""
    token = get_token_from_request(request)
    if not token:
        return api_error('ไม่พบ Token', status=401)

    decoded = verify_token(token)
    if not decoded:
        return api_error('Token ไม่ถูกต้องหรือหมดอายุ', status=401)

    user = User.objects.filter(pk=decoded.get('id')).first()
    if user is None:
        return api_error('ไม่พบผู้ใช้งาน', status=404)

    profile, _ = Profile.objects.get_or_create(user=user)
    if not profile.is_usable:
        return api_error('บัญชีถูกระงับการใช้งาน', status=403)

    return api_success(user=build_session(user))
