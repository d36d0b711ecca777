# app/scene/timezone.py
import ipaddress
import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import requests
from flask import current_app

FALLBACK_TIMEZONE = "UTC"


class TimezoneLookupError(Exception):
    pass


def is_known_timezone(name: Optional[str]) -> bool:
    if not name:
        return False
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def _is_public_ip(addr: Optional[str]) -> bool:
    try:
        return ipaddress.ip_address((addr or "").strip()).is_global
    except ValueError:
        return False


def lookup_timezone(remote_addr: Optional[str], base_url: str, timeout: float = 3.0) -> str:
    """
    Ask the geolocation service for the IANA zone of `remote_addr`.
    Raises TimezoneLookupError on anything but a 2xx with a known zone name.
    """
    if not _is_public_ip(remote_addr):
        raise TimezoneLookupError(f"no public address to look up ({remote_addr!r})")

    url = f"{base_url.rstrip('/')}/{remote_addr.strip()}/timezone/"
    try:
        resp = requests.get(url, timeout=timeout, headers={"Accept": "text/plain"})
    except requests.RequestException as exc:
        raise TimezoneLookupError(f"request to {url} failed: {exc}") from exc

    if not resp.ok:
        raise TimezoneLookupError(f"timezone lookup failed with status {resp.status_code}")

    name = (resp.text or "").strip()
    if not name:
        raise TimezoneLookupError("timezone lookup returned an empty body")
    if not is_known_timezone(name):
        raise TimezoneLookupError(f"unknown timezone {name!r}")
    return name


def local_timezone_name() -> Optional[str]:
    """IANA name of the server's own zone, or None when it can't be told."""
    tz = (os.environ.get("TZ") or "").lstrip(":").strip()
    if is_known_timezone(tz):
        return tz

    try:
        name = Path("/etc/timezone").read_text(encoding="utf-8").strip()
        if is_known_timezone(name):
            return name
    except OSError:
        pass

    target = os.path.realpath("/etc/localtime")
    if "zoneinfo/" in target:
        name = target.split("zoneinfo/", 1)[1]
        if is_known_timezone(name):
            return name
    return None


def resolve_timezone(remote_addr: Optional[str]) -> str:
    """
    Visitor zone from the IP lookup, else the server's zone, else "UTC".
    Never raises.
    """
    cfg = current_app.config
    try:
        return lookup_timezone(
            remote_addr,
            cfg.get("TIMEZONE_LOOKUP_URL", "https://ipapi.co"),
            timeout=cfg.get("TIMEZONE_LOOKUP_TIMEOUT", 3.0),
        )
    except TimezoneLookupError as exc:
        current_app.logger.warning("Timezone lookup failed, using fallback: %s", exc)

    try:
        local = local_timezone_name()
    except OSError:
        local = None
    return local or FALLBACK_TIMEZONE
