import ipaddress


def is_ipv6(ip_addr):
    try:
        ipaddress.IPv6Address(ip_addr)
        return True
    except ipaddress.AddressValueError:
        return False


def normalize_ip(ip_addr):
    """Return the canonical text form of an IPv4/IPv6 address, or None if invalid."""
    try:
        return str(ipaddress.ip_address(ip_addr))
    except ValueError:
        return None
