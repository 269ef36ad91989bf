"""
IP Address Utilities

Client address extraction for per-client rate limiting.
"""

import ipaddress
from typing import List, Union

from starlette.requests import Request

# Reverse proxies whose X-Real-IP / X-Forwarded-For headers are honored
TRUSTED_PROXIES: List[Union[ipaddress.IPv4Address, ipaddress.IPv6Address]] = [
    ipaddress.ip_address("127.0.0.1"),
    ipaddress.ip_address("::1"),
]


def _is_trusted_proxy(client_ip: str) -> bool:
    try:
        return ipaddress.ip_address(client_ip) in TRUSTED_PROXIES
    except ValueError:
        return False


def get_client_ip(request: Request) -> str:
    """
    Endereço do cliente, respeitando cabeçalhos de proxy apenas quando a
    conexão vem de um proxy confiável (localhost).
    """
    direct_ip = request.client.host if request.client else "unknown"

    if _is_trusted_proxy(direct_ip):
        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

    return direct_ip


def normalize_ip(ip: str) -> str:
    """
    Maps equivalent addresses to one bucket key.

    - ::1 → 127.0.0.1
    - ::ffff:x.x.x.x → x.x.x.x
    """
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return ip

    if isinstance(addr, ipaddress.IPv6Address):
        if addr == ipaddress.IPv6Address("::1"):
            return "127.0.0.1"
        if addr.ipv4_mapped:
            return str(addr.ipv4_mapped)

    return str(addr)
