"""
토큰 인증 (JWT, HS256)

- generate_token: 로그인 성공 시 발급 (기본 7일)
- verify_token: 만료/위조 토큰은 None
- token_required: API 뷰 데코레이터 (request.auth_user 에 payload 저장)
"""
import logging
from datetime import timedelta
from functools import wraps

import jwt
from django.conf import settings
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt

from apps.core.api import api_error

logger = logging.getLogger(__name__)


def build_session(user):
    """토큰/응답에 담는 사용자 정보"""
    profile = getattr(user, 'profile', None)
    return {
        'id': user.id,
        'username': user.username,
        'email': user.email,
        'role': profile.role if profile else 'user',
    }


def generate_token(user):
    now = timezone.now()
    payload = {
        **build_session(user),
        'iat': now,
        'exp': now + timedelta(days=settings.JWT_EXPIRY_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token):
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.debug("만료된 토큰")
        return None
    except jwt.InvalidTokenError as e:
        logger.debug(f"잘못된 토큰: {e}")
        return None


def get_token_from_request(request):
    """Authorization: Bearer <token>"""
    auth_header = request.META.get('HTTP_AUTHORIZATION', '')
    if auth_header.startswith('Bearer '):
        return auth_header[7:]
    return None


def get_auth_user(request):
    token = get_token_from_request(request)
    if not token:
        return None
    return verify_token(token)


def token_required(view_func):
    """
    Bearer 토큰 인증 데코레이터

    토큰이 없거나 유효하지 않으면 401, 통과하면 request.auth_user 에 payload 저장
    (id, username, email, role)
    """
    @csrf_exempt
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        auth_user = get_auth_user(request)
        if not auth_user:
            return api_error('กรุณาเข้าสู่ระบบ', status=401)

        request.auth_user = auth_user
        return view_func(request, *args, **kwargs)

    return wrapper
