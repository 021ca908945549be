"""
Host 화이트리스트 미들웨어

허용 목록은 settings.ALLOWED_ORIGINS (예: "http://localhost,https://dash.example.com")
CORS 는 django-cors-headers (settings.CORS_*) 에서 같은 목록으로 처리
"""
import logging
from urllib.parse import urlparse

from django.conf import settings
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def extract_host(origin):
    """http://localhost:7117 → localhost"""
    hostname = urlparse(origin).hostname
    return (hostname or origin).lower()


def get_allowed_origins():
    return list(getattr(settings, 'ALLOWED_ORIGINS', []))


def is_allowed_host(host):
    """요청 Host 헤더가 허용 Origin 의 hostname 과 같은지 (포트 무시)"""
    if not host:
        return False

    host = host.lower().split(':')[0]
    return any(extract_host(origin) == host for origin in get_allowed_origins())


class HostAllowlistMiddleware:
    """허용되지 않은 도메인으로 들어온 요청 차단 (403 JSON)"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        host = request.META.get('HTTP_HOST') or request.META.get('SERVER_NAME')

        if not is_allowed_host(host):
            logger.warning(f"허용되지 않은 Host 차단: host={host}, path={request.path}")
            return JsonResponse(
                {'success': False, 'error': 'Access denied: Unauthorized domain'},
                status=403,
            )

        return self.get_response(request)
