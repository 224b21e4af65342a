import boto3
from botocore.config import Config
from django.conf import settings

AWS_KEY = getattr(settings, 'AWS_KEY', '')
AWS_SECRET = getattr(settings, 'AWS_SECRET', '')
AWS_MAX_ATTEMPTS = getattr(settings, 'AWS_MAX_ATTEMPTS', 5)

# Pass '-' as if AWS_KEY from settings is empty
# because boto will look into '~/.aws/config' file if
# AWS_KEY or AWS_SECRET are not defined, which is the default
# and can mistaknely use production keys

_client = boto3.client(
    service_name='route53',
    aws_access_key_id=AWS_KEY or '-',
    aws_secret_access_key=AWS_SECRET or '-',
    config=Config(retries={'max_attempts': AWS_MAX_ATTEMPTS, 'mode': 'standard'}),
)


def get_client():
    return _client
