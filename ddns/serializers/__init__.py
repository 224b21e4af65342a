from .registration import RegistrationSerializer, TokenSerializer  # noqa: F401
from .host import HostSerializer  # noqa: F401
