from django.core.management.base import BaseCommand

from ddns import tasks


class Command(BaseCommand):
    help = 'Push the address records of every host to Route 53'

    def handle(self, *args, **options):
        tasks.reconcile_hosts.apply()
