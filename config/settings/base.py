"""
Django settings for config project.
"""

from pathlib import Path
from urllib.parse import urlparse
from dotenv import load_dotenv
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent  # settings 폴더 안이므로 parent 하나 더

load_dotenv(BASE_DIR / '.env')


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = (
    os.environ.get("DJANGO_SECRET_KEY")
    or os.environ.get("SECRET_KEY")
    or "ci-dev-secret-key"
    )
DEBUG = os.environ.get("DEBUG", "0") == "1"


# 허용 Origin (콤마 구분) → CORS + Host 화이트리스트 공용
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("ALLOWED_ORIGINS", "http://localhost").split(",")
    if origin.strip()
]

ALLOWED_HOSTS = [
    (urlparse(origin).hostname or origin).lower()
    for origin in ALLOWED_ORIGINS
]


# CORS (django-cors-headers): /api 경로만, ALLOWED_ORIGINS 와 같은 목록
# localhost 가 목록에 있으면 localhost 는 포트 상관없이 허용
CORS_ALLOWED_ORIGINS = [
    origin.rstrip("/")
    for origin in ALLOWED_ORIGINS
    if urlparse(origin).scheme in ("http", "https") and urlparse(origin).path in ("", "/")
]
CORS_ALLOWED_ORIGIN_REGEXES = (
    [r"^https?://localhost(:\d+)?$"] if "localhost" in ALLOWED_HOSTS else []
)
CORS_URLS_REGEX = r"^/api(/.*)?$"
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = [
    "x-csrf-token",
    "x-requested-with",
    "accept",
    "accept-version",
    "content-length",
    "content-md5",
    "content-type",
    "date",
    "x-api-version",
    "authorization",
]
CORS_PREFLIGHT_MAX_AGE = 86400


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    'corsheaders',

    #내 앱들
    'apps.core',
    'apps.accounts.apps.AccountsConfig',
    'apps.databases',
    'apps.transactions',
    'apps.dashboard',
]

MIDDLEWARE = [
    'apps.core.middleware.HostAllowlistMiddleware',  # get_host() 이전에 검사해야 함
    'corsheaders.middleware.CorsMiddleware',  # CommonMiddleware 보다 앞
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'


# Database
# https://docs.djangoproject.com/en/6.0/ref/settings/#databases
# 시스템 DB (users, user_databases). 사이트별 거래 DB는 apps.databases.connector 에서 직접 연결

DB_ENGINE = os.environ.get("DB_ENGINE", "sqlite")

if DB_ENGINE == "mysql":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.mysql",
            "NAME": os.environ.get("DB_NAME", "tx_monitor"),
            "USER": os.environ.get("DB_USER", "root"),
            "PASSWORD": os.environ.get("DB_PASSWORD", ""),
            "HOST": os.environ.get("DB_HOST", "localhost"),
            "PORT": os.environ.get("DB_PORT", "3306"),
            "CONN_MAX_AGE": 60,
            "CONN_HEALTH_CHECKS": True,
            "OPTIONS": {
                "charset": "utf8mb4",
                "connect_timeout": 30,
            },
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }


# Password validation
# https://docs.djangoproject.com/en/6.0/ref/settings/#auth-password-validators
# 회원가입 규칙은 apps.accounts.forms.RegisterForm 에서 직접 검증

AUTH_PASSWORD_VALIDATORS = []


# Internationalization
# https://docs.djangoproject.com/en/6.0/topics/i18n/

LANGUAGE_CODE = 'th'

TIME_ZONE = 'Asia/Bangkok'

USE_I18N = True

USE_TZ = True


# Token 인증
JWT_SECRET = os.environ.get("JWT_SECRET") or SECRET_KEY
JWT_ALGORITHM = "HS256"
JWT_EXPIRY_DAYS = int(os.environ.get("JWT_EXPIRY_DAYS", "7"))


# 사이트별 거래 DB (고정값)
TENANT_DB_NAME = os.environ.get("TENANT_DB_NAME", "joker555")
TENANT_TABLE_NAME = os.environ.get("TENANT_TABLE_NAME", "transactions")
TENANT_CONNECT_TIMEOUT = int(os.environ.get("TENANT_CONNECT_TIMEOUT", "10"))

# 연결 오류 재시도 (지연 = DB_RETRY_DELAY * 시도 횟수)
DB_RETRY_MAX = int(os.environ.get("DB_RETRY_MAX", "3"))
DB_RETRY_DELAY = float(os.environ.get("DB_RETRY_DELAY", "1.0"))

EXPORT_MAX_ROWS = int(os.environ.get("EXPORT_MAX_ROWS", "10000"))


# Static files (CSS, JavaScript, Images)
# https://docs.djangoproject.com/en/6.0/howto/static-files/

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'  # collectstatic 할 때 모일 곳


# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'apps': {
            'handlers': ['console'],
            'level': os.environ.get('LOG_LEVEL', 'INFO'),
        },
    },
}
