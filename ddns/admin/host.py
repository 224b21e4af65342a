import logging

from django.contrib import admin, messages
from django.utils import timezone

from ddns.apps import get_engine
from ddns.exceptions import DDNSError
from ddns.models import Host

from .engine_delete import EngineDeleteAdmin

logger = logging.getLogger('ddns.admin')


def reconcile_selected(modeladmin, request, queryset):
    engine = get_engine()
    for host in queryset:
        try:
            engine.reconcile_host(host)
        except DDNSError:
            logger.exception("Error while reconciling %s", host.hostname)
            modeladmin.message_user(
                request, 'Failed to reconcile {}'.format(host.hostname), messages.ERROR)
reconcile_selected.short_description = "Push records to Route 53"  # noqa


@admin.register(Host)
class HostAdmin(EngineDeleteAdmin):
    list_display = ('hostname', 'ip', 'subzone_list', 'updated_at', 'is_stale')
    fields = ('hostname', 'subzones', 'ip', 'updated_at')
    readonly_fields = fields
    search_fields = ('hostname', 'ip')
    actions = EngineDeleteAdmin.actions + (reconcile_selected,)

    def has_add_permission(self, request):
        return False

    def subzone_list(self, obj):
        return ', '.join(obj.subzones)
    subzone_list.short_description = 'Subzones'

    def is_stale(self, obj):
        return obj.is_expired(timezone.now() - get_engine().expiration)
    is_stale.boolean = True
    is_stale.short_description = 'Expired'
