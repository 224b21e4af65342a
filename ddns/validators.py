from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator


validate_main_zone = RegexValidator(
    regex=r'^[a-z0-9]{4,32}\Z',
    message=u'Invalid hostname',
    code='invalid_hostname'
)

validate_sub_zone = RegexValidator(
    regex=r'^[a-z0-9]{2,32}\Z',
    message=u'Invalid sub hostname',
    code='invalid_subzone'
)


def validate_main(name):
    return isinstance(name, str) and validate_main_zone.regex.search(name) is not None


def validate_sub(name):
    return isinstance(name, str) and validate_sub_zone.regex.search(name) is not None


def is_blacklisted(name, blacklist):
    return name in blacklist


def parse_subzones(value):
    """
    Turn a comma separated string (or any iterable of labels) into a tuple of
    subzones, dropping duplicates but keeping the order they were supplied in.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(',') if value else []
    subzones = []
    for sub in value:
        if sub not in subzones:
            subzones.append(sub)
    return tuple(subzones)


def validate_subzones(value):
    for sub in value:
        if not validate_sub(sub):
            raise ValidationError(
                'Invalid sub hostname: %(sub)s', code='invalid_subzone', params={'sub': sub})
