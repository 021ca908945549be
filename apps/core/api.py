"""
JSON API 공통 헬퍼

모든 응답은 {"success": bool, ...} 형태로 통일합니다.
"""
import json
import logging

from django.http import JsonResponse

logger = logging.getLogger(__name__)


class InvalidRequestBody(Exception):
    """요청 본문이 JSON 객체가 아님"""


def api_success(status=200, **data):
    return JsonResponse({'success': True, **data}, status=status)


def api_error(message, status=400, **extra):
    return JsonResponse({'success': False, 'error': message, **extra}, status=status)


def parse_json_body(request):
    """
    요청 본문을 dict 로 변환

    빈 본문은 빈 dict 로 취급합니다.

    Raises:
        InvalidRequestBody: JSON 형식 오류 또는 객체가 아닌 경우
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning(f"잘못된 JSON 본문: path={request.path}, error={e}")
        raise InvalidRequestBody('รูปแบบข้อมูลไม่ถูกต้อง') from e

    if not isinstance(data, dict):
        raise InvalidRequestBody('รูปแบบข้อมูลไม่ถูกต้อง')

    return data


def first_form_error(form):
    """폼 에러 중 첫 번째 메시지 (API 응답용)"""
    for errors in form.errors.values():
        if errors:
            return errors[0]
    return 'ข้อมูลไม่ถูกต้อง'
