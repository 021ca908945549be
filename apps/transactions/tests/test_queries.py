from decimal import Decimal

import pytest

from apps.transactions.queries import (
    build_filters,
    get_transaction_summary,
    get_unique_users,
    query_transactions,
    quote_table,
)


class TestBuildFilters:

    def test_always_excludes_hidden(self):
        conditions, params = build_filters()

        assert conditions == ['hidden = 0']
        assert params == []

    def test_dates_expanded_to_day_bounds(self):
        conditions, params = build_filters(start_date='2024-01-01', end_date='2024-01-31')

        assert 'timestamp >= %s' in conditions
        assert 'timestamp <= %s' in conditions
        assert params == ['2024-01-01 00:00:00', '2024-01-31 23:59:59']

    def test_dates_with_time_used_as_is(self):
        _, params = build_filters(start_date='2024-01-01 08:30:00', end_date='2024-01-01 12:00:00')

        assert params == ['2024-01-01 08:30:00', '2024-01-01 12:00:00']

    def test_payment_type(self):
        assert '(tmw != 1)' in build_filters(payment_type='bank')[0]
        assert '(tmw = 1)' in build_filters(payment_type='truemoney')[0]
        # all / manual 은 조건 없음
        assert build_filters(payment_type='all')[0] == ['hidden = 0']
        assert build_filters(payment_type='manual')[0] == ['hidden = 0']

    def test_auto_type(self):
        assert 'isAuto = 1' in build_filters(auto_type='auto')[0]
        assert 'isAuto = 0' in build_filters(auto_type='manual')[0]
        assert build_filters(auto_type='all')[0] == ['hidden = 0']

    def test_username_is_like_parameter(self):
        conditions, params = build_filters(username="bob' OR 1=1")

        assert 'username LIKE %s' in conditions
        assert params == ["%bob' OR 1=1%"]

    def test_status_zero_is_applied(self):
        """status=0 (대기) 도 조건에 포함"""
        conditions, params = build_filters(status=0)

        assert 'status = %s' in conditions
        assert params == [0]

    def test_all_filters_order(self):
        conditions, params = build_filters(
            start_date='2024-01-01',
            end_date='2024-01-02',
            type_tran='deposit',
            username='bob',
            payment_type='bank',
            auto_type='auto',
            status='1',
        )

        assert conditions[0] == 'hidden = 0'
        assert params == ['deposit', '2024-01-01 00:00:00', '2024-01-02 23:59:59', '%bob%', 1]


@pytest.mark.django_db
class TestQueries:

    def test_quote_table(self, tenant_db):
        assert quote_table(tenant_db) == '`transactions`'

        tenant_db.table_name = 'bad-name'
        with pytest.raises(ValueError):
            quote_table(tenant_db)

    def test_query_transactions(self, tenant_db, fake_mysql):
        rows = [{'id': 2, 'username': 'bob'}, {'id': 1, 'username': 'amy'}]
        fake_mysql.set_responses([
            ('COUNT(*) AS total', [{'total': 42}]),
            ('SELECT *', rows),
        ])

        result = query_transactions(tenant_db, limit=2, offset=10, type_tran='deposit', payment_type='bank')

        assert result == {'transactions': rows, 'total': 42}

        (count_sql, count_params), (list_sql, list_params) = fake_mysql.executed
        assert 'FROM `transactions` WHERE hidden = 0 AND type_tran = %s AND (tmw != 1)' in count_sql
        assert count_params == ('deposit',)
        assert list_sql.endswith('ORDER BY timestamp DESC LIMIT %s OFFSET %s')
        assert list_params == ('deposit', 2, 10)

    def test_query_transactions_default_limit(self, tenant_db, fake_mysql):
        query_transactions(tenant_db)

        _, list_params = fake_mysql.executed[1]
        assert list_params == (50, 0)

    def test_summary(self, tenant_db, fake_mysql):
        fake_mysql.set_responses([
            ('AS success_count', [{
                'success_count': 3,
                'total_amount': Decimal('600.00'),
                'average_amount': Decimal('200.0000'),
                'auto_count': Decimal('2'),
                'manual_count': Decimal('1'),
                'bank_count': Decimal('2'),
                'truemoney_count': Decimal('1'),
                'bank_amount': Decimal('450.50'),
                'truemoney_amount': Decimal('149.50'),
            }]),
            ('COUNT(*) AS count', [{'count': 2}]),
        ])

        summary = get_transaction_summary(tenant_db, start_date='2024-01-01', type_tran='deposit')

        assert summary == {
            'total_amount': 600,
            'total_count': 5,
            'success_count': 3,
            'pending_count': 2,
            'average_amount': 200,
            'auto_count': 2,
            'manual_count': 1,
            'bank_count': 2,
            'truemoney_count': 1,
            'bank_amount': 450.5,
            'truemoney_amount': 149.5,
        }

        (success_sql, success_params), (pending_sql, pending_params) = fake_mysql.executed
        assert 'WHERE status = 1 AND hidden = 0 AND type_tran = %s AND timestamp >= %s' in success_sql
        assert 'WHERE status = 0 AND hidden = 0' in pending_sql
        assert success_params == pending_params == ('deposit', '2024-01-01 00:00:00')

    def test_summary_empty_table(self, tenant_db, fake_mysql):
        """빈 결과는 모두 0 (NULL 집계 포함)"""
        fake_mysql.set_responses([
            ('AS success_count', [{
                'success_count': 0,
                'total_amount': Decimal('0'),
                'average_amount': Decimal('0'),
                'auto_count': None,
                'manual_count': None,
                'bank_count': None,
                'truemoney_count': None,
                'bank_amount': None,
                'truemoney_amount': None,
            }]),
        ])

        summary = get_transaction_summary(tenant_db)

        assert all(value == 0 for value in summary.values())

    def test_unique_users(self, tenant_db, fake_mysql):
        fake_mysql.set_responses([('DISTINCT username', [{'username': 'amy'}, {'username': 'bob'}])])

        users = get_unique_users(tenant_db, search='b')

        assert users == ['amy', 'bob']
        sql, params = fake_mysql.executed[0]
        assert sql == (
            'SELECT DISTINCT username FROM `transactions` WHERE hidden = 0 '
            'AND username LIKE %s ORDER BY username LIMIT 100'
        )
        assert params == ('%b%',)

    def test_unique_users_without_search(self, tenant_db, fake_mysql):
        get_unique_users(tenant_db)

        sql, params = fake_mysql.executed[0]
        assert 'LIKE' not in sql
        assert params == ()
