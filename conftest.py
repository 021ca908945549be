"""
전체 테스트 공통 fixture

- 사이트 DB(PyMySQL) 는 FakeConnection 으로 대체
- 테스트 클라이언트 Host(testserver) 허용
"""
import pytest
from django.contrib.auth.models import User

from apps.accounts.tokens import generate_token
from apps.databases.models import TenantDatabase


class FakeCursor:
    def __init__(self, connection):
        self.connection = connection
        self.rows = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=()):
        self.connection.executed.append((sql, tuple(params)))
        self.rows = self.connection.respond(sql, tuple(params))

    def fetchall(self):
        return list(self.rows)

    def fetchone(self):
        return self.rows[0] if self.rows else None


class FakeConnection:
    """
    SQL 에 포함된 문자열로 결과를 돌려주는 가짜 연결

    responses: [(SQL 부분 문자열, [row, ...]), ...] 앞에서부터 먼저 일치하는 것 사용
    (값 대신 예외를 넣으면 raise, 함수를 넣으면 바인딩 값으로 호출)
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.executed = []
        self.open = True
        self.pinged = False

    def respond(self, sql, params=()):
        for key, rows in self.responses:
            if key in sql:
                if isinstance(rows, Exception):
                    raise rows
                if callable(rows):
                    return rows(params)
                return rows
        return []

    def cursor(self):
        return FakeCursor(self)

    def ping(self, reconnect=False):
        self.pinged = True

    def close(self):
        self.open = False


class FakeMySQL:
    """pymysql.connect 대체 (connect 호출 기록 + 오류 주입)"""

    def __init__(self):
        self.connection = FakeConnection()
        self.connect_calls = []
        self.connections = []
        self.errors = []

    def set_responses(self, responses):
        self.connection.responses = list(responses)

    def fail_with(self, *errors):
        """다음 connect 호출부터 순서대로 오류 발생"""
        self.errors = list(errors)

    @property
    def executed(self):
        return [item for conn in self.connections for item in conn.executed]

    def connect(self, **kwargs):
        self.connect_calls.append(kwargs)
        if self.errors:
            raise self.errors.pop(0)
        conn = FakeConnection(self.connection.responses)
        self.connections.append(conn)
        return conn


@pytest.fixture(autouse=True)
def api_settings(settings):
    settings.ALLOWED_ORIGINS = list(settings.ALLOWED_ORIGINS) + ['http://testserver']
    settings.JWT_SECRET = 'test-jwt-secret-key-for-pytest-only-0000'
    settings.DB_RETRY_DELAY = 0
    return settings


@pytest.fixture
def fake_mysql(monkeypatch):
    fake = FakeMySQL()
    monkeypatch.setattr('apps.databases.connector.pymysql.connect', fake.connect)
    return fake


@pytest.fixture
def test_user(db):
    """테스트용 사용자 (Profile 은 signal 로 자동 생성)"""
    return User.objects.create_user(username='tester', email='tester@example.com', password='pass1234')


@pytest.fixture
def other_user(db):
    """다른 사용자 (권한 테스트용)"""
    return User.objects.create_user(username='other', email='other@example.com', password='pass1234')


@pytest.fixture
def auth_headers(test_user):
    return {'HTTP_AUTHORIZATION': f'Bearer {generate_token(test_user)}'}


@pytest.fixture
def tenant_db(test_user):
    """테스트용 사이트 DB 등록"""
    return TenantDatabase.objects.create(
        user=test_user,
        name='Site A',
        note='main',
        host='10.0.0.1',
        port=3306,
        db_user='reader',
        db_password='secret',
    )


@pytest.fixture
def other_tenant_db(other_user):
    return TenantDatabase.objects.create(
        user=other_user,
        name='Other Site',
        host='10.0.0.2',
        db_user='reader',
        db_password='secret',
    )
