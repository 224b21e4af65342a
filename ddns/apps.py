from django.apps import AppConfig, apps


class DdnsConfig(AppConfig):
    name = 'ddns'
    verbose_name = 'Dynamic DNS'
    default_auto_field = 'django.db.models.AutoField'
    engine = None

    def ready(self):
        from ddns.engine import Engine
        self.engine = Engine.from_settings()


def get_engine():
    return apps.get_app_config('ddns').engine
