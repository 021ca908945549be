from django.contrib import admin
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = [
        'user',
        'get_email',
        'role',
        'status',
        'get_last_login',
        'created_at',
    ]

    list_display_links = ['user', 'get_email']

    list_filter = [
        'role',
        'status',
        'created_at',
    ]

    search_fields = [
        'user__username',
        'user__email',
    ]

    fieldsets = [
        ('기본 정보', {
            'fields': ('user',)
        }),
        ('권한/상태', {
            'fields': ('role', 'status'),
            'classes': ('wide',),
        }),
        ('타임스탬프', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']
    actions = ['ban_users', 'activate_users']

    @admin.display(description='이메일')
    def get_email(self, obj):
        return obj.user.email

    @admin.display(description='마지막 로그인')
    def get_last_login(self, obj):
        return obj.user.last_login or '-'

    @admin.action(description='선택한 사용자 정지')
    def ban_users(self, request, queryset):
        updated = queryset.update(status='banned')
        self.message_user(request, f"{updated}명 정지 처리되었습니다.")

    @admin.action(description='선택한 사용자 활성화')
    def activate_users(self, request, queryset):
        updated = queryset.update(status='active')
        self.message_user(request, f"{updated}명 활성화되었습니다.")
