"""거래 조회 필터 폼 (쿼리스트링)"""
from datetime import datetime

from django import forms
from django.conf import settings

from .queries import DEFAULT_LIMIT

MAX_LIMIT = 1000
DATE_FORMATS = ['%Y-%m-%d', '%Y-%m-%d %H:%M:%S', '%Y-%m-%d %H:%M']


class DateRangeForm(forms.Form):
    """
    startDate / endDate 쿼리스트링

    날짜는 문자열 그대로 넘기고, 시간 보정은 쿼리 빌더에서 처리합니다.
    """

    startDate = forms.CharField(required=False)
    endDate = forms.CharField(required=False)

    def _clean_date(self, field):
        value = (self.cleaned_data.get(field) or '').strip()
        if not value:
            return ''
        for fmt in DATE_FORMATS:
            try:
                datetime.strptime(value, fmt)
            except ValueError:
                continue
            return value
        raise forms.ValidationError('รูปแบบวันที่ไม่ถูกต้อง')

    def clean_startDate(self):
        return self._clean_date('startDate')

    def clean_endDate(self):
        return self._clean_date('endDate')

    def get_date_range(self):
        return {
            'start_date': self.cleaned_data.get('startDate') or None,
            'end_date': self.cleaned_data.get('endDate') or None,
        }


class TransactionFilterForm(DateRangeForm):
    """
    /api/deposits 조회 조건

    파라미터 이름은 프론트엔드와 동일하게 camelCase 를 사용합니다.
    """

    TYPE_CHOICES = [('deposit', '입금'), ('withdraw', '출금')]
    PAYMENT_CHOICES = [('all', '전체'), ('bank', '은행'), ('truemoney', 'TrueMoney'), ('manual', '수동')]
    AUTO_CHOICES = [('all', '전체'), ('auto', '자동'), ('manual', '수동')]

    databaseId = forms.IntegerField(
        min_value=1,
        error_messages={'required': 'กรุณาระบุ Database ID', 'invalid': 'Database ID ไม่ถูกต้อง'},
    )
    action = forms.CharField(required=False)
    typeTran = forms.ChoiceField(choices=TYPE_CHOICES, required=False)
    paymentType = forms.ChoiceField(choices=PAYMENT_CHOICES, required=False)
    autoType = forms.ChoiceField(choices=AUTO_CHOICES, required=False)
    username = forms.CharField(required=False, max_length=100)
    status = forms.IntegerField(required=False, error_messages={'invalid': 'status ไม่ถูกต้อง'})
    limit = forms.IntegerField(required=False, min_value=1)
    offset = forms.IntegerField(required=False, min_value=0)

    def clean_limit(self):
        limit = self.cleaned_data.get('limit') or DEFAULT_LIMIT
        return min(limit, MAX_LIMIT)

    def clean_offset(self):
        return self.cleaned_data.get('offset') or 0

    def get_filters(self):
        """쿼리 빌더용 필터 (빈 값 제외)"""
        data = self.cleaned_data
        filters = {
            **self.get_date_range(),
            'type_tran': data.get('typeTran') or None,
            'payment_type': data.get('paymentType') or None,
            'auto_type': data.get('autoType') or None,
            'username': data.get('username') or None,
            'status': data.get('status'),
        }
        return {key: value for key, value in filters.items() if value is not None}

    def get_summary_filters(self):
        """요약에는 기간/유형/사용자 조건만 적용"""
        filters = self.get_filters()
        return {
            key: filters[key]
            for key in ('start_date', 'end_date', 'type_tran', 'username')
            if key in filters
        }

    @staticmethod
    def export_limit():
        return settings.EXPORT_MAX_ROWS
