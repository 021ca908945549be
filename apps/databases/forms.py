"""사이트 DB 등록/수정/연결 테스트 폼"""

from django import forms

from .models import DEFAULT_PORT, MASK, TenantDatabase

REQUIRED_MESSAGE = 'กรุณากรอกข้อมูลให้ครบ'
CONNECTION_FIELDS = ('host', 'db_user', 'db_password', 'port')


class TenantDatabaseForm(forms.ModelForm):
    """
    사이트 DB 등록 폼

    db_name / table_name 은 입력받지 않고 모델 기본값(고정값)을 사용합니다.
    """

    port = forms.IntegerField(required=False, min_value=1, max_value=65535)

    class Meta:
        model = TenantDatabase
        fields = ['name', 'note', 'host', 'port', 'db_user', 'db_password']
        error_messages = {
            field: {'required': REQUIRED_MESSAGE}
            for field in ['name', 'host', 'db_user', 'db_password']
        }

    def clean_port(self):
        return self.cleaned_data.get('port') or DEFAULT_PORT

    def clean_note(self):
        return self.cleaned_data.get('note') or None


class ConnectionTestForm(forms.Form):
    """저장 전 연결 테스트 폼"""

    MISSING_MESSAGE = 'กรุณากรอกข้อมูล Host, DB User และ Password'

    host = forms.CharField(max_length=255, error_messages={'required': MISSING_MESSAGE})
    port = forms.IntegerField(required=False, min_value=1, max_value=65535)
    db_user = forms.CharField(max_length=100, error_messages={'required': MISSING_MESSAGE})
    db_password = forms.CharField(max_length=255, strip=False, error_messages={'required': MISSING_MESSAGE})

    def build_database(self):
        """저장하지 않은 TenantDatabase (연결 테스트용)"""
        return TenantDatabase(
            name='',
            host=self.cleaned_data['host'],
            port=self.cleaned_data.get('port') or DEFAULT_PORT,
            db_user=self.cleaned_data['db_user'],
            db_password=self.cleaned_data['db_password'],
        )


class TenantDatabaseUpdateForm(forms.Form):
    """
    사이트 DB 수정 폼

    - name / port: 값이 있을 때만 변경
    - note: 키가 있으면 변경 (빈 값이면 삭제)
    - host / db_user / db_password: 비어있거나 마스킹 값('********')이면 유지
    - db_name / table_name: 수정 불가
    """

    name = forms.CharField(required=False, max_length=100)
    note = forms.CharField(required=False)
    port = forms.IntegerField(required=False, min_value=1, max_value=65535)
    host = forms.CharField(required=False, max_length=255)
    db_user = forms.CharField(required=False, max_length=100)
    db_password = forms.CharField(required=False, max_length=255, strip=False)
    is_active = forms.BooleanField(required=False)

    def get_changes(self):
        """실제로 변경할 필드 dict"""
        data = self.cleaned_data
        changes = {}

        if data.get('name'):
            changes['name'] = data['name']
        if 'note' in self.data:
            changes['note'] = data.get('note') or None
        if data.get('port'):
            changes['port'] = data['port']

        for field in ('host', 'db_user', 'db_password'):
            value = data.get(field)
            if value and value != MASK:
                changes[field] = value

        if self.data.get('is_active') is not None:
            changes['is_active'] = data.get('is_active', False)

        return changes

    @staticmethod
    def touches_connection(changes):
        return any(field in changes for field in CONNECTION_FIELDS)
