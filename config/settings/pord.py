from .base import *

DEBUG = False

# ALLOWED_ORIGINS 필수 (base.py 에서 ALLOWED_HOSTS 로도 변환됨)
if not os.getenv('ALLOWED_ORIGINS'):
    raise RuntimeError('ALLOWED_ORIGINS 환경변수를 설정하세요')

if SECRET_KEY == 'ci-dev-secret-key' or JWT_SECRET == 'ci-dev-secret-key':
    raise RuntimeError('운영 환경에서는 DJANGO_SECRET_KEY / JWT_SECRET 을 설정해야 합니다')

# 보안 설정
SECURE_SSL_REDIRECT = os.getenv('SECURE_SSL_REDIRECT', 'True') == 'True'
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True

# CSRF 신뢰 출처 (admin 용)
CSRF_TRUSTED_ORIGINS = [origin for origin in ALLOWED_ORIGINS if origin.startswith(('http://', 'https://'))]
