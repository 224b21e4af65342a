from django.core.management.base import BaseCommand

from ddns.apps import get_engine


class Command(BaseCommand):
    help = 'Delete address records that do not belong to any registered host'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            dest='dry_run',
            default=False,
            help='Only print which records would be deleted',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        for record in get_engine().delete_orphaned_records(dry_run=dry_run):
            self.stdout.write('deleting {} {}'.format(record.type, record.name))
