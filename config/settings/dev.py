from .base import *

DEBUG = True

# 로컬 개발: localhost 는 포트 상관없이 허용 (CORS_ALLOWED_ORIGIN_REGEXES)
ALLOWED_ORIGINS = ALLOWED_ORIGINS + ['http://127.0.0.1']
CORS_ALLOWED_ORIGINS = CORS_ALLOWED_ORIGINS + ['http://127.0.0.1']
ALLOWED_HOSTS = ALLOWED_HOSTS + ['127.0.0.1', '0.0.0.0']

# Debug Toolbar 설정 (사용시)
INTERNAL_IPS = [
    '127.0.0.1',
]

# 개발 환경 로깅 (상세하게)
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'DEBUG',
    },
    'loggers': {
        'django.db.backends': {
            'handlers': ['console'],
            'level': 'INFO',  # SQL 쿼리 보고 싶으면 DEBUG, 아니면 INFO
            'propagate': False,
        },
    },
}
