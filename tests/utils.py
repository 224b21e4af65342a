from datetime import timedelta

from django.utils import timezone

from ddns.models import Host


def fqdn(name):
    return '{}.example.com.'.format(name)


def register(engine, hostname, subzones='', ip='1.1.1.1'):
    token = engine.register(hostname, subzones, '', ip)
    return Host.objects.get(token=token)


def age(host, days):
    """Pretend `host` was last refreshed `days` ago."""
    Host.objects.filter(pk=host.pk).update(updated_at=timezone.now() - timedelta(days=days))
    host.refresh_from_db()
    return host
