from django.core.management.base import BaseCommand

from apps.databases.connector import check_connection, check_system_database
from apps.databases.models import TenantDatabase


class Command(BaseCommand):
    help = '등록된 사이트 DB 연결 상태 확인'

    def add_arguments(self, parser):
        parser.add_argument('--user', help='특정 사용자(username)의 DB만 확인')
        parser.add_argument('--all', action='store_true', help='비활성 DB 포함')

    def handle(self, *args, **options):
        if not check_system_database():
            self.stderr.write(self.style.ERROR('시스템 DB 연결 실패'))
            return

        databases = TenantDatabase.objects.all() if options['all'] else TenantDatabase.active.all()
        if options['user']:
            databases = databases.filter(user__username=options['user'])
        databases = databases.select_related('user').order_by('user__username', 'name')

        ok = 0
        failed = 0
        for database in databases:
            result = check_connection(database)
            label = f"[{database.user.username}] {database.name} (ID: {database.pk})"
            if result['success']:
                ok += 1
                self.stdout.write(self.style.SUCCESS(f'OK    {label}'))
            else:
                failed += 1
                self.stdout.write(self.style.ERROR(f"FAIL  {label}: {result['error']}"))

        summary = f'연결 성공: {ok}개, 실패: {failed}개'
        if failed:
            self.stdout.write(self.style.WARNING(summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))
