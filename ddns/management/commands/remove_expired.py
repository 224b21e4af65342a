from django.core.management.base import BaseCommand

from ddns.apps import get_engine


class Command(BaseCommand):
    help = 'Delete hosts that were not refreshed within the retention window'

    def handle(self, *args, **options):
        removed = get_engine().remove_expired()
        for hostname in removed:
            self.stdout.write('removed {}'.format(hostname))
        self.stdout.write('Done! {} expired hosts removed.'.format(len(removed)))
