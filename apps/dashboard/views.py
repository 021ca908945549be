from django.views.decorators.http import require_GET
import logging

import pymysql

from apps.accounts.tokens import token_required
from apps.core.api import api_error, api_success, first_form_error
from apps.databases.connector import check_system_database, error_message
from apps.databases.models import TenantDatabase
from apps.transactions.forms import DateRangeForm
from apps.transactions.queries import get_transaction_summary
from apps.transactions.views import summary_to_camel

logger = logging.getLogger(__name__)


def site_overview(database, start_date=None, end_date=None):
    """
    사이트 1곳의 입금/출금 요약

    조회 실패 시 error 만 채워서 반환 (전체 응답은 실패시키지 않음)
    """
    site = database.to_summary_dict()
    filters = {'start_date': start_date, 'end_date': end_date}

    try:
        deposit = get_transaction_summary(database, type_tran='deposit', **filters)
        withdraw = get_transaction_summary(database, type_tran='withdraw', **filters)
    except (pymysql.MySQLError, OSError, ValueError) as e:
        message = error_message(e) if isinstance(e, pymysql.MySQLError) else str(e)
        logger.warning(f"사이트 요약 조회 실패: database_id={database.pk}, error={message}")
        site.update(deposit=None, withdraw=None, profit=0, error=message)
        return site

    site.update(
        deposit=summary_to_camel(deposit),
        withdraw=summary_to_camel(withdraw),
        profit=deposit['total_amount'] - withdraw['total_amount'],
        error=None,
    )
    return site


@token_required
@require_GET
def overview(request):
    """
    전체 대시보드

    - 본인의 활성 사이트 DB 전부 (이름순, 순차 조회)
    - 사이트별 입금/출금 요약 + 합계
    - profit = 입금 합계 - 출금 합계
    """
    form = DateRangeForm(request.GET)
    if not form.is_valid():
        return api_error(first_form_error(form), status=400)
    date_range = form.get_date_range()

    databases = TenantDatabase.active.filter(user_id=request.auth_user['id']).order_by('name')
    sites = [site_overview(database, **date_range) for database in databases]

    succeeded = [site for site in sites if site['error'] is None]
    total_deposits = sum(site['deposit']['totalAmount'] for site in succeeded)
    total_withdrawals = sum(site['withdraw']['totalAmount'] for site in succeeded)

    return api_success(
        sites=sites,
        totals={
            'totalDeposits': total_deposits,
            'totalWithdrawals': total_withdrawals,
            'profit': total_deposits - total_withdrawals,
            'siteCount': len(sites),
            'failedCount': len(sites) - len(succeeded),
        },
    )


@require_GET
def health(request):
    """시스템 DB 상태 (인증 불필요)"""
    if not check_system_database():
        return api_error('Database unavailable', status=503, database=False)
    return api_success(database=True)
