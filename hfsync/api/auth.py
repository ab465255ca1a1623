"""
Derives the per-machine download credential and pairs it with the account
name for HTTP basic authentication.
"""

import hashlib
import logging
import socket

import aiohttp
import psutil

from hfsync.exceptions import CredentialError
from hfsync.models.config import SyncSettings

log = logging.getLogger(__name__)

_NULL_HARDWARE_ADDRESS = "00:00:00:00:00:00"
_UNINDEXED = 1 << 31


def _interface_order(names) -> list[str]:
    """Orders interfaces by kernel index; unindexed ones follow by name."""
    indexes = {name: index for index, name in socket.if_nameindex()}
    return sorted(names, key=lambda name: (indexes.get(name, _UNINDEXED), name))


def _hardware_addresses() -> list[str]:
    """Returns the link-layer address of each interface, in kernel index order."""
    addresses = []
    interfaces = psutil.net_if_addrs()
    for name in _interface_order(interfaces):
        for addr in interfaces[name]:
            if addr.family != psutil.AF_LINK or not addr.address:
                continue
            mac = addr.address.lower().replace("-", ":")
            # Loopback and tunnel devices report no real hardware address.
            if mac == _NULL_HARDWARE_ADDRESS:
                continue
            addresses.append(mac)
    return addresses


def derive_credential() -> str:
    """
    Computes a stable identifier for this machine.

    The host name is concatenated with the hardware address of every network
    interface and hashed with SHA-1. This is an identity token, not a secret.

    Raises:
        CredentialError: If the host name or interfaces cannot be read.
    """
    try:
        hostname = socket.gethostname()
        addresses = _hardware_addresses()
    except OSError as e:
        raise CredentialError(f"Could not read host identity: {e}") from e

    if not hostname:
        raise CredentialError("Host name is empty; cannot derive a credential.")

    log.debug(f"Deriving credential from host '{hostname}' and {len(addresses)} interfaces")
    uid = hostname + "".join(addresses)
    return hashlib.sha1(uid.encode("utf-8")).hexdigest()  # noqa: S324


def build_basic_auth(settings: SyncSettings, credential: str) -> aiohttp.BasicAuth:
    """
    Pairs the account name and credential in the order the server expects.

    'credential_first' sends the credential as the username and the account
    name as the password; 'account_first' swaps them.
    """
    if settings.auth_order == "account_first":
        return aiohttp.BasicAuth(login=settings.account_name, password=credential)
    return aiohttp.BasicAuth(login=credential, password=settings.account_name)
