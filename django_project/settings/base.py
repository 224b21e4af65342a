"""
Django settings for the ddns project.

Every value can be overridden from the environment, or from a
``local_settings.py`` module found on the python path.
"""
import os
from datetime import timedelta


def env_bool(name, default=False):
    return os.getenv(name, str(default)).lower() in ('1', 'true', 'yes', 'on')


def env_list(name, default=''):
    return [item.strip() for item in os.getenv(name, default).split(',') if item.strip()]


BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

SECRET_KEY = os.getenv('SECRET_KEY', 'insecure-change-me')
DEBUG = env_bool('DEBUG')
ALLOWED_HOSTS = env_list('ALLOWED_HOSTS', '*')

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'ddns.apps.DdnsConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'django_project.urls'

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

WSGI_APPLICATION = 'django_project.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': os.getenv('DDNS_DB_ENGINE', 'django.db.backends.sqlite3'),
        'NAME': os.getenv('DDNS_DB_NAME', os.path.join(BASE_DIR, 'db.sqlite3')),
        'USER': os.getenv('DDNS_DB_USER', ''),
        'PASSWORD': os.getenv('DDNS_DB_PASSWORD', ''),
        'HOST': os.getenv('DDNS_DB_HOST', ''),
        'PORT': os.getenv('DDNS_DB_PORT', ''),
        'CONN_MAX_AGE': int(os.getenv('DDNS_DB_CONN_MAX_AGE', 3600)),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'
STATIC_ROOT = os.getenv('STATIC_ROOT', os.path.join(BASE_DIR, 'static'))
SERVE_STATIC = env_bool('SERVE_STATIC')

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'rest_framework.authentication.SessionAuthentication',
        'rest_framework.authentication.BasicAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.IsAuthenticated',
    ),
    'EXCEPTION_HANDLER': 'ddns.middleware.custom_exception_handler',
}

# AWS
AWS_KEY = os.getenv('AWS_KEY', '')
AWS_SECRET = os.getenv('AWS_SECRET', '')
AWS_MAX_ATTEMPTS = int(os.getenv('AWS_MAX_ATTEMPTS', 5))

# Dynamic DNS
DDNS_DOMAIN = os.getenv('DDNS_DOMAIN', 'example.com.')
DDNS_HOSTED_ZONE_ID = os.getenv('DDNS_HOSTED_ZONE_ID', None)
DDNS_RECORD_TTL = int(os.getenv('DDNS_RECORD_TTL', 60))
DDNS_BLACKLIST = env_list('DDNS_BLACKLIST', 'admin,mail,smtp,imap,ftp,root,localhost')
DDNS_EXPIRATION_DAYS = int(os.getenv('DDNS_EXPIRATION_DAYS', 30))
DDNS_EXPIRY_INTERVAL = int(os.getenv('DDNS_EXPIRY_INTERVAL', 2 * 60 * 60))
DDNS_EXPIRY_LOCK_TIMEOUT = int(os.getenv('DDNS_EXPIRY_LOCK_TIMEOUT', 300))
DDNS_TRUST_X_FORWARDED_FOR = env_bool('DDNS_TRUST_X_FORWARDED_FOR')

# Locking. Without a lock server, locks only serialize requests within one process.
LOCK_SERVER_URL = os.getenv('LOCK_SERVER_URL', None)
DDNS_LOCK_TIMEOUT = int(os.getenv('DDNS_LOCK_TIMEOUT', 60))
DDNS_LOCK_WAIT = float(os.getenv('DDNS_LOCK_WAIT', 10))

HASHIDS_MIN_LENGTH = int(os.getenv('HASHIDS_MIN_LENGTH', 7))

# Celery
CELERY_BROKER_URL = os.getenv('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_TASK_IGNORE_RESULT = True
CELERY_BEAT_SCHEDULE = {
    'remove-expired-hosts': {
        'task': 'ddns.tasks.remove_expired',
        'schedule': timedelta(seconds=DDNS_EXPIRY_INTERVAL),
    },
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'ddns': {
            'handlers': ['console'],
            'level': os.getenv('DDNS_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
        'celery': {
            'handlers': ['console'],
            'level': 'INFO',
        },
    },
}
