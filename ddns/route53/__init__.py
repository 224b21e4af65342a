from .record import Record, record_type_for  # noqa: F401
from .zone import Zone, ZoneNotFound, get_zone  # noqa: F401
