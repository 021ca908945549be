"""
사이트 거래 테이블 조회/집계

사이트 DB 의 거래 테이블(기본: transactions) 은 우리 ORM 모델이 아니므로
파라미터 바인딩 SQL 로 직접 조회합니다.

사용 컬럼:
    username, timestamp, amount, type_tran ('deposit' / 'withdraw'),
    tmw (1 = TrueMoney, 그 외 = 은행), isAuto (1 = 자동, 0 = 수동),
    status (1 = 성공, 0 = 대기), hidden (1 = 취소된 거래, 항상 제외)
"""
from decimal import Decimal

from apps.databases.connector import fetch_all, fetch_one, run_on_tenant

DEFAULT_LIMIT = 50
UNIQUE_USERS_LIMIT = 100

PAYMENT_TYPE_CONDITIONS = {
    'bank': '(tmw != 1)',       # tmw = 0, -6 등 전부 은행
    'truemoney': '(tmw = 1)',
}

AUTO_TYPE_CONDITIONS = {
    'auto': 'isAuto = 1',
    'manual': 'isAuto = 0',
}


def quote_table(db):
    """테이블명 식별자 인용 (모델 검증으로 영문/숫자/_ 만 저장됨)"""
    table_name = db.effective_table_name
    if not table_name.replace('_', '').isalnum():
        raise ValueError(f"잘못된 테이블명: {table_name!r}")
    return f'`{table_name}`'


def start_of_day(value):
    """'2024-01-31' → '2024-01-31 00:00:00' (시간이 있으면 그대로)"""
    return value if ' ' in value else f'{value} 00:00:00'


def end_of_day(value):
    """'2024-01-31' → '2024-01-31 23:59:59' (시간이 있으면 그대로)"""
    return value if ' ' in value else f'{value} 23:59:59'


def build_filters(start_date=None, end_date=None, type_tran=None, username=None,
                  payment_type=None, auto_type=None, status=None):
    """
    WHERE 조건 / 바인딩 값 생성

    Returns:
        (conditions, params) - conditions 는 항상 'hidden = 0' 으로 시작
    """
    conditions = ['hidden = 0']
    params = []

    if type_tran:
        conditions.append('type_tran = %s')
        params.append(type_tran)

    if start_date:
        conditions.append('timestamp >= %s')
        params.append(start_of_day(start_date))

    if end_date:
        conditions.append('timestamp <= %s')
        params.append(end_of_day(end_date))

    if payment_type in PAYMENT_TYPE_CONDITIONS:
        conditions.append(PAYMENT_TYPE_CONDITIONS[payment_type])

    if auto_type in AUTO_TYPE_CONDITIONS:
        conditions.append(AUTO_TYPE_CONDITIONS[auto_type])

    if username:
        conditions.append('username LIKE %s')
        params.append(f'%{username}%')

    if status is not None and status != '':
        conditions.append('status = %s')
        params.append(int(status))

    return conditions, params


def where_clause(conditions):
    return f"WHERE {' AND '.join(conditions)}"


def to_number(value):
    """집계 결과(Decimal/None) → int 또는 float"""
    if value is None:
        return 0
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def query_transactions(db, limit=DEFAULT_LIMIT, offset=0, **filters):
    """
    거래 목록 + 전체 건수

    Args:
        db: TenantDatabase
        limit / offset: 페이지네이션 (최신순)
        **filters: build_filters 인자

    Returns:
        {'transactions': [...], 'total': int}
    """
    table = quote_table(db)
    conditions, params = build_filters(**filters)
    where = where_clause(conditions)
    limit = limit or DEFAULT_LIMIT
    offset = offset or 0

    def operation(conn):
        count_row = fetch_one(conn, f'SELECT COUNT(*) AS total FROM {table} {where}', params)
        rows = fetch_all(
            conn,
            f'SELECT * FROM {table} {where} ORDER BY timestamp DESC LIMIT %s OFFSET %s',
            [*params, limit, offset],
        )
        return {
            'transactions': rows,
            'total': int(count_row['total']) if count_row else 0,
        }

    return run_on_tenant(db, operation)


def get_transaction_summary(db, start_date=None, end_date=None, type_tran=None, username=None):
    """
    성공 거래 요약 + 대기 건수

    - 성공(status = 1) 거래 기준 합계/평균/분류별 건수·금액
    - 대기(status = 0) 건수는 같은 조건으로 별도 집계
    - 결제수단/자동여부/상태 필터는 요약에 적용하지 않음
    """
    table = quote_table(db)
    conditions, params = build_filters(
        start_date=start_date,
        end_date=end_date,
        type_tran=type_tran,
        username=username,
    )
    success_where = where_clause(['status = 1', *conditions])
    pending_where = where_clause(['status = 0', *conditions])

    def operation(conn):
        summary = fetch_one(
            conn,
            f"""SELECT
                COUNT(*) AS success_count,
                COALESCE(SUM(amount), 0) AS total_amount,
                COALESCE(AVG(amount), 0) AS average_amount,
                SUM(CASE WHEN isAuto = 1 THEN 1 ELSE 0 END) AS auto_count,
                SUM(CASE WHEN isAuto = 0 THEN 1 ELSE 0 END) AS manual_count,
                SUM(CASE WHEN tmw != 1 THEN 1 ELSE 0 END) AS bank_count,
                SUM(CASE WHEN tmw = 1 THEN 1 ELSE 0 END) AS truemoney_count,
                SUM(CASE WHEN tmw != 1 THEN amount ELSE 0 END) AS bank_amount,
                SUM(CASE WHEN tmw = 1 THEN amount ELSE 0 END) AS truemoney_amount
            FROM {table} {success_where}""",
            params,
        ) or {}
        pending = fetch_one(conn, f'SELECT COUNT(*) AS count FROM {table} {pending_where}', params) or {}
        return summary, pending

    summary, pending = run_on_tenant(db, operation)

    success_count = to_number(summary.get('success_count'))
    pending_count = to_number(pending.get('count'))

    return {
        'total_amount': to_number(summary.get('total_amount')),
        'total_count': success_count + pending_count,
        'success_count': success_count,
        'pending_count': pending_count,
        'average_amount': to_number(summary.get('average_amount')),
        'auto_count': to_number(summary.get('auto_count')),
        'manual_count': to_number(summary.get('manual_count')),
        'bank_count': to_number(summary.get('bank_count')),
        'truemoney_count': to_number(summary.get('truemoney_count')),
        'bank_amount': to_number(summary.get('bank_amount')),
        'truemoney_amount': to_number(summary.get('truemoney_amount')),
    }


def get_unique_users(db, search=None):
    """취소되지 않은 거래의 사용자 목록 (최대 100명, 이름순)"""
    table = quote_table(db)
    sql = f'SELECT DISTINCT username FROM {table} WHERE hidden = 0'
    params = []

    if search:
        sql += ' AND username LIKE %s'
        params.append(f'%{search}%')

    sql += f' ORDER BY username LIMIT {UNIQUE_USERS_LIMIT}'

    rows = run_on_tenant(db, lambda conn: fetch_all(conn, sql, params))
    return [row['username'] for row in rows]
