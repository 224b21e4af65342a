from django_project.settings.base import *  # noqa

SECRET_KEY = 'test-secret'
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

DDNS_DOMAIN = 'example.com.'
DDNS_HOSTED_ZONE_ID = None
DDNS_BLACKLIST = ['admin', 'mail']
LOCK_SERVER_URL = None

REST_FRAMEWORK.update({  # noqa: F405
    'TEST_REQUEST_DEFAULT_FORMAT': 'json',
    'DEFAULT_RENDERER_CLASSES': ('rest_framework.renderers.JSONRenderer',)
})

LOGGING['loggers']['ddns']['level'] = 'WARN'  # noqa: F405
