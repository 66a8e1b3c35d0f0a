"""Local IPv4 discovery from the machine's network interfaces."""

import ipaddress
import logging

import netifaces

logger = logging.getLogger(__name__)

LOOPBACK_IP = "127.0.0.1"


def discover_local_ipv4() -> str:
    """Return the first non-loopback IPv4 address, or 127.0.0.1.

    Interface order is whatever netifaces reports for the platform. Never
    raises.
    """
    try:
        for iface in netifaces.interfaces():
            addrs = netifaces.ifaddresses(iface).get(netifaces.AF_INET, [])
            for addr in addrs:
                ip = addr.get("addr", "")
                if _is_usable(ip):
                    logger.info(f"Using {ip} from interface {iface}")
                    return ip
    except (OSError, ValueError) as e:
        logger.warning(f"Could not enumerate network interfaces: {e}")
    return LOOPBACK_IP


def _is_usable(ip: str) -> bool:
    try:
        parsed = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return parsed.version == 4 and not parsed.is_loopback
