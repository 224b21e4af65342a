from rest_framework import fields
from rest_framework import serializers
from rest_framework.utils import html

from ddns.engine import NewRegistration, RenewRegistration
from ddns.validators import parse_subzones


class SubzonesField(fields.Field):
    """Accepts either a comma separated string or a list of labels."""
    default_error_messages = {
        'invalid': 'Expected a comma separated string or a list of names.'
    }

    def get_value(self, dictionary):
        # form posts may repeat the key, one label per value
        if html.is_html_input(dictionary) and self.field_name in dictionary:
            values = dictionary.getlist(self.field_name)
            if len(values) > 1:
                return values
        return super(SubzonesField, self).get_value(dictionary)

    def to_internal_value(self, data):
        if isinstance(data, (list, tuple)) and all(isinstance(sub, str) for sub in data):
            return parse_subzones(data)
        if not isinstance(data, str):
            self.fail('invalid')
        return parse_subzones(data)

    def to_representation(self, value):
        return list(value)


class RegistrationSerializer(serializers.Serializer):
    mainzone = fields.CharField(max_length=255, allow_blank=True)
    subzones = SubzonesField(required=False, default=())
    token = fields.CharField(max_length=64, required=False, allow_blank=True, default='')
    ip = fields.IPAddressField(required=False, allow_blank=True, default='')

    def to_request(self, ip):
        """
        Build the engine request: a renewal when a token was presented, a new
        registration otherwise. ``ip`` is used when the client sent none.
        """
        data = self.validated_data
        ip = data['ip'] or ip
        if data['token']:
            return RenewRegistration(data['token'], data['mainzone'], data['subzones'], ip)
        return NewRegistration(data['mainzone'], data['subzones'], ip)


class TokenSerializer(serializers.Serializer):
    token = fields.CharField(max_length=64)
    ip = fields.IPAddressField(required=False, allow_blank=True, default='')
