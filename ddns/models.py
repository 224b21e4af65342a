
from django.db import models
from django.utils import timezone

from ddns.validators import parse_subzones, validate_main_zone, validate_subzones
from ddns.vendors.hashids import encode_id


class SubzonesField(models.TextField):
    """
    Ordered set of subzone labels, stored as a comma separated string.
    """
    description = 'Comma separated subzone labels'

    def from_db_value(self, value, expression, connection):
        return parse_subzones(value)

    def to_python(self, value):
        return parse_subzones(value)

    def get_prep_value(self, value):
        return ','.join(parse_subzones(value))

    def value_to_string(self, obj):
        return self.get_prep_value(self.value_from_object(obj))


class Host(models.Model):
    hostname = models.CharField(max_length=32, unique=True, validators=[validate_main_zone])
    subzones = SubzonesField(blank=True, default=tuple, validators=[validate_subzones])
    ip = models.GenericIPAddressField(verbose_name='IP Address')
    token = models.CharField(max_length=64, unique=True, editable=False)
    updated_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ['hostname']

    def __str__(self):
        return '{} ({})'.format(self.hostname, self.ip)

    @property
    def public_id(self):
        return encode_id(self.pk)

    def is_expired(self, cutoff):
        return self.updated_at < cutoff
