"""
사이트 거래 DB 커넥터

등록된 TenantDatabase 접속 정보로 요청 시점에 PyMySQL 연결을 직접 엽니다.
(사이트마다 서버가 다르므로 Django DATABASES 에 넣지 않음)

- open_connection / tenant_connection: 연결 (일시 오류 재시도)
- run_on_tenant: 연결 + 작업 전체를 재시도 단위로 실행
- check_connection: 연결 테스트 (재시도 없음, 성공 시 last_connected 기록)
- check_system_database: 시스템 DB 상태 확인 (연결 오류 재시도)
"""
import logging
import socket
import time
from contextlib import contextmanager

import pymysql
from pymysql.cursors import DictCursor
from django.conf import settings
from django.db import DatabaseError, OperationalError, connection as system_connection

logger = logging.getLogger(__name__)

# 재시도 대상 MySQL 오류 코드
TRANSIENT_ERROR_CODES = {
    1040,  # Too many connections
    2003,  # Can't connect (refused / timeout)
    2006,  # Server has gone away
    2013,  # Lost connection during query
}


def is_transient_error(error):
    if isinstance(error, (socket.timeout, ConnectionError)):
        return True
    if isinstance(error, pymysql.err.OperationalError) and error.args:
        return error.args[0] in TRANSIENT_ERROR_CODES
    return False


def error_message(error):
    """PyMySQL 오류 (code, message) → message"""
    if isinstance(error, pymysql.MySQLError) and len(error.args) >= 2:
        return str(error.args[1])
    return str(error) or error.__class__.__name__


def with_retry(func, *args, label='', **kwargs):
    """
    일시적인 연결 오류만 재시도

    지연: DB_RETRY_DELAY * 시도 횟수 (1초, 2초, ...)
    그 외 오류나 재시도 소진 시 그대로 raise
    """
    max_retries = max(1, settings.DB_RETRY_MAX)

    for attempt in range(1, max_retries + 1):
        try:
            return func(*args, **kwargs)
        except (pymysql.MySQLError, OSError) as e:
            if not is_transient_error(e) or attempt >= max_retries:
                raise
            logger.warning(
                f"DB 연결 오류 ({label}) (attempt {attempt}/{max_retries}): {error_message(e)}"
            )
            time.sleep(settings.DB_RETRY_DELAY * attempt)


def connect_params(db):
    return {
        'host': db.host,
        'port': int(db.port or 3306),
        'user': db.db_user,
        'password': db.db_password,
        'database': db.effective_db_name,
        'connect_timeout': settings.TENANT_CONNECT_TIMEOUT,
        'charset': 'utf8mb4',
        'cursorclass': DictCursor,
        'autocommit': True,
    }


def open_connection(db, retry=True):
    if not retry:
        return pymysql.connect(**connect_params(db))
    return with_retry(pymysql.connect, label=db.name, **connect_params(db))


def close_quietly(conn):
    if conn.open:
        conn.close()


@contextmanager
def tenant_connection(db, retry=True):
    """
    사용 후 반드시 닫히는 사이트 DB 연결

    Example:
        with tenant_connection(db) as conn:
            with conn.cursor() as cursor:
                cursor.execute('SELECT 1')
    """
    conn = open_connection(db, retry=retry)
    try:
        yield conn
    finally:
        close_quietly(conn)


def run_on_tenant(db, operation):
    """
    operation(conn) 을 사이트 DB 에서 실행

    조회 도중 연결이 끊기면 새 연결로 작업 전체를 다시 실행합니다.
    """
    def attempt():
        with tenant_connection(db, retry=False) as conn:
            return operation(conn)

    return with_retry(attempt, label=db.name)


def fetch_all(conn, sql, params=()):
    with conn.cursor() as cursor:
        cursor.execute(sql, tuple(params))
        return list(cursor.fetchall())


def fetch_one(conn, sql, params=()):
    with conn.cursor() as cursor:
        cursor.execute(sql, tuple(params))
        return cursor.fetchone()


def check_connection(db):
    """
    연결 테스트

    Returns:
        {'success': True} 또는 {'success': False, 'error': 메시지}
    """
    try:
        with tenant_connection(db, retry=False) as conn:
            conn.ping(reconnect=False)
    except (pymysql.MySQLError, OSError, ValueError) as e:
        # ValueError: 호스트명 IDNA 인코딩 실패 (UnicodeError) 등
        logger.info(f"연결 테스트 실패: {db.name or '-'} - {error_message(e)}")
        return {'success': False, 'error': error_message(e)}

    db.mark_connected()
    return {'success': True}


def check_system_database():
    """
    시스템 DB (users, user_databases) 상태 확인

    연결 오류(OperationalError)는 사이트 DB 와 같은 규칙으로 재시도합니다.
    """
    max_retries = max(1, settings.DB_RETRY_MAX)

    for attempt in range(1, max_retries + 1):
        try:
            with system_connection.cursor() as cursor:
                cursor.execute('SELECT 1')
            return True
        except OperationalError as e:
            if attempt >= max_retries:
                logger.error(f"시스템 DB 연결 실패 (attempt {attempt}/{max_retries}): {e}")
                return False
            logger.warning(f"시스템 DB 연결 오류 (attempt {attempt}/{max_retries}): {e}")
            # 끊어진 연결은 버리고 다음 시도에서 새로 연결
            if not system_connection.in_atomic_block:
                system_connection.close()
            time.sleep(settings.DB_RETRY_DELAY * attempt)
        except DatabaseError as e:
            logger.error(f"시스템 DB 상태 확인 실패: {e}")
            return False

    return False
