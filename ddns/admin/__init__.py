from .host import HostAdmin  # noqa: F401
