"""Public address lookups: HTTP JSON echo service and DNS resolver."""

from __future__ import annotations

import json
import urllib.error
import urllib.request

from hwprint.collectors.powershell import run_ps

DEFAULT_PUBLIC_IP_URL = "https://api.ipify.org?format=json"
DEFAULT_DNS_RESOLVER = "resolver1.opendns.com"
DEFAULT_DNS_HOSTNAME = "myip.opendns.com"


class NetworkLookupError(Exception):
    """A public address lookup timed out, failed, or returned garbage."""


def fetch_public_ipv4(url: str = DEFAULT_PUBLIC_IP_URL, timeout: float = 5) -> str | None:
    """Return the public IPv4 address reported by a JSON echo service.

    The service must answer with an object carrying an ``ip`` field.
    Returns None when the field is missing or blank.

    Raises:
        NetworkLookupError: on timeout, HTTP/URL error, or invalid JSON.
    """
    req = urllib.request.Request(url, headers={"Accept": "application/json"})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            payload = json.loads(resp.read().decode("utf-8"))
    except urllib.error.HTTPError as exc:
        raise NetworkLookupError(f"HTTP {exc.code} from {url}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise NetworkLookupError(f"{url}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise NetworkLookupError(f"invalid JSON from {url}: {exc}") from exc

    if not isinstance(payload, dict):
        raise NetworkLookupError(f"unexpected payload from {url}")
    ip = payload.get("ip")
    return str(ip).strip() if ip else None


def resolve_public_dns(
    hostname: str = DEFAULT_DNS_HOSTNAME,
    resolver: str = DEFAULT_DNS_RESOLVER,
    timeout: int = 10,
) -> str | None:
    """Return the address a named resolver observes for this host.

    Queries ``hostname`` (an echo record such as myip.opendns.com) against
    ``resolver`` with Resolve-DnsName and returns the first A record.

    Raises:
        NetworkLookupError: on timeout or resolver failure.
    """
    command = (
        f"Resolve-DnsName -Name '{hostname}' -Server '{resolver}' -Type A "
        f"-DnsOnly -ErrorAction Stop | Where-Object {{ $_.Type -eq 'A' }} "
        f"| Select-Object -First 1 -ExpandProperty IPAddress"
    )
    result = run_ps(command, timeout=timeout, as_json=False)
    if not result.success:
        raise NetworkLookupError(f"{resolver}: {result.describe_error()}")
    answer = result.output.strip()
    return answer or None
