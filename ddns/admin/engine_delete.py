from django.core.exceptions import PermissionDenied
from django.contrib import admin
from django.contrib.admin.actions import delete_selected as delete_selected_

from ddns.apps import get_engine


def delete_selected(modeladmin, request, queryset):
    if not modeladmin.has_delete_permission(request):
        raise PermissionDenied
    if request.POST.get('post'):
        for obj in queryset:
            modeladmin.delete_model(request, obj)
    else:
        return delete_selected_(modeladmin, request, queryset)
delete_selected.short_description = "Delete selected"  # noqa


class EngineDeleteAdmin(admin.ModelAdmin):
    """Deletes go through the engine, so the zone records are removed too."""
    actions = (delete_selected,)

    def delete_model(self, request, obj):
        get_engine().delete_host(obj)
