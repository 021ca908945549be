import apps.databases.models
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='TenantDatabase',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('name', models.CharField(db_index=True, max_length=100)),
                ('note', models.TextField(blank=True, null=True)),
                ('host', models.CharField(max_length=255)),
                ('port', models.PositiveIntegerField(default=3306, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(65535)])),
                ('db_user', models.CharField(max_length=100)),
                ('db_password', models.CharField(max_length=255)),
                ('db_name', models.CharField(default=apps.databases.models.default_db_name, max_length=64)),
                ('table_name', models.CharField(default=apps.databases.models.default_table_name, max_length=64, validators=[django.core.validators.RegexValidator(message='ชื่อตารางต้องเป็นตัวอักษร ตัวเลข หรือ _ เท่านั้น', regex='^[A-Za-z0-9_]+$')])),
                ('last_connected', models.DateTimeField(blank=True, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tenantdatabase_set', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'user_databases',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['user', 'is_active', 'name'], name='user_db_owner_active_idx')],
            },
        ),
    ]
