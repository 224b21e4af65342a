from rest_framework import fields
from rest_framework import serializers

from ddns.models import Host


class HostSerializer(serializers.ModelSerializer):
    id = fields.CharField(source='public_id', read_only=True)
    subzones = fields.ListField(child=fields.CharField(), read_only=True)
    fqdn = fields.SerializerMethodField()

    class Meta:
        model = Host
        fields = ['id', 'hostname', 'fqdn', 'subzones', 'ip', 'updated_at']
        read_only_fields = fields

    def get_fqdn(self, obj):
        engine = self.context.get('engine')
        if engine is None:
            return None
        return engine.fqdn(obj.hostname)
