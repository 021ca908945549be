from django.http import HttpResponse
from django.utils import timezone
from django.views.decorators.http import require_GET
import logging

import pymysql

from apps.accounts.tokens import token_required
from apps.core.api import api_error, api_success, first_form_error
from apps.databases.connector import error_message
from apps.databases.views import get_user_database
from .forms import TransactionFilterForm
from .queries import get_transaction_summary, get_unique_users, query_transactions
from .utils import export_transactions_to_excel

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


# =============================================================================
# Helper 함수
# =============================================================================

def summary_to_camel(summary):
    """total_amount → totalAmount"""
    def camel(key):
        head, *rest = key.split('_')
        return head + ''.join(part.capitalize() for part in rest)

    return {camel(key): value for key, value in summary.items()}


def resolve_filter(request):
    """
    쿼리스트링 검증 + 대상 DB 조회

    Returns:
        (form, database, error_response) - 실패 시 error_response 만 채워짐
    """
    form = TransactionFilterForm(request.GET)
    if not form.is_valid():
        return None, None, api_error(first_form_error(form), status=400)

    database = get_user_database(request, form.cleaned_data['databaseId'])
    if database is None:
        return None, None, api_error('ไม่พบ Database', status=404)

    return form, database, None


# =============================================================================
# 거래 조회
# =============================================================================

@token_required
@require_GET
def deposits(request):
    """
    거래 목록 + 요약 조회

    - action=getUsers 이면 사용자 목록만 반환 (username 이 검색어)
    - 요약은 기간/유형/사용자 조건만 적용
    - 사이트 DB 오류는 500 + 드라이버 메시지
    """
    form, database, error = resolve_filter(request)
    if error:
        return error

    try:
        if form.cleaned_data.get('action') == 'getUsers':
            users = get_unique_users(database, form.cleaned_data.get('username') or None)
            return api_success(users=users)

        result = query_transactions(
            database,
            limit=form.cleaned_data['limit'],
            offset=form.cleaned_data['offset'],
            **form.get_filters(),
        )
        summary = get_transaction_summary(database, **form.get_summary_filters())

    except pymysql.MySQLError as e:
        logger.error(f"거래 조회 실패: database_id={database.pk}, error={error_message(e)}")
        return api_error(error_message(e), status=500)
    except Exception as e:
        logger.error(f"거래 조회 중 예상치 못한 오류: database_id={database.pk}, error={e}", exc_info=True)
        return api_error('Failed to fetch transactions', status=500)

    return api_success(
        transactions=result['transactions'],
        total=result['total'],
        summary=summary_to_camel(summary),
        database=database.to_summary_dict(),
    )


@token_required
@require_GET
def deposits_export(request):
    """
    거래 내역 엑셀 다운로드

    목록 조회와 같은 조건, 페이지네이션 없이 최대 EXPORT_MAX_ROWS 건
    """
    form, database, error = resolve_filter(request)
    if error:
        return error

    try:
        result = query_transactions(
            database,
            limit=TransactionFilterForm.export_limit(),
            offset=0,
            **form.get_filters(),
        )
        excel_file = export_transactions_to_excel(result['transactions'], sheet_title=database.name)
    except pymysql.MySQLError as e:
        logger.error(f"거래 내보내기 실패: database_id={database.pk}, error={error_message(e)}")
        return api_error(error_message(e), status=500)
    except Exception as e:
        logger.error(f"거래 내보내기 중 예상치 못한 오류: database_id={database.pk}, error={e}", exc_info=True)
        return api_error('Failed to export transactions', status=500)

    timestamp = timezone.localtime().strftime('%Y%m%d_%H%M%S')

    if result['total'] > len(result['transactions']):
        logger.warning(
            f"내보내기 건수 제한: database_id={database.pk}, "
            f"total={result['total']}, exported={len(result['transactions'])}"
        )

    filename = f"transactions_{database.pk}_{timestamp}.xlsx"
    response = HttpResponse(excel_file.read(), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'

    logger.info(f"거래 내보내기: database_id={database.pk}, rows={len(result['transactions'])}")
    return response
