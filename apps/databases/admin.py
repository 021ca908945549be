from django import forms
from django.contrib import admin

from .connector import check_connection
from .models import TenantDatabase


class TenantDatabaseAdminForm(forms.ModelForm):
    """비밀번호는 화면에 다시 보여주지 않음"""

    db_password = forms.CharField(widget=forms.PasswordInput(render_value=False), required=False)

    class Meta:
        model = TenantDatabase
        fields = '__all__'

    def clean_db_password(self):
        password = self.cleaned_data.get('db_password')
        # 비워두면 기존 비밀번호 유지
        if not password and self.instance.pk:
            return self.instance.db_password
        if not password:
            raise forms.ValidationError('비밀번호를 입력하세요.')
        return password


@admin.register(TenantDatabase)
class TenantDatabaseAdmin(admin.ModelAdmin):
    """
    사이트 DB 관리 (TenantDatabase)
    """
    form = TenantDatabaseAdminForm

    list_display = [
        'name',
        'user',
        'db_name',
        'table_name',
        'is_active',
        'last_connected',
        'created_at',
    ]

    list_display_links = ['name']

    list_filter = ['is_active', 'db_name']

    # 검색 (DB 이름, 메모, 소유자 아이디)
    search_fields = ['name', 'note', 'user__username']

    fieldsets = [
        ('기본 정보', {
            'fields': ('user', 'name', 'note', 'is_active')
        }),
        ('접속 정보', {
            'fields': ('host', 'port', 'db_user', 'db_password', 'db_name', 'table_name')
        }),
        ('상태', {
            'fields': ('last_connected',),
            'classes': ('collapse',),
        }),
    ]

    readonly_fields = ['last_connected']
    actions = ['test_connections', 'deactivate_databases', 'restore_databases']

    @admin.action(description='선택한 DB 연결 테스트')
    def test_connections(self, request, queryset):
        ok = 0
        for database in queryset:
            result = check_connection(database)
            if result['success']:
                ok += 1
            else:
                self.message_user(request, f"{database.name}: {result['error']}", level='error')
        self.message_user(request, f"연결 성공 {ok}/{queryset.count()}개")

    @admin.action(description='선택한 DB 숨기기')
    def deactivate_databases(self, request, queryset):
        for database in queryset:
            database.deactivate()
        self.message_user(request, f"{queryset.count()}개 DB 를 숨겼습니다.")

    @admin.action(description='선택한 DB 복원')
    def restore_databases(self, request, queryset):
        for database in queryset:
            database.restore()
        self.message_user(request, f"{queryset.count()}개 DB 를 복원했습니다.")
