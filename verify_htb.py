#!/usr/bin/env python3
"""
Verification script for a local HTB client setup.

This script checks:
1. HTB_API_TOKEN is set
2. The HTB API accepts the token (active machine lookup)
3. VPN servers can be listed for the labs product (optional)
"""

import sys

from htb_client import (
    PRODUCT_LABS,
    HTBClient,
    HTBClientError,
    NoActiveLabMachine,
    UnknownSubscriptionTier,
)
from htb_client.utils.config import htb_api_token
from htb_client.utils.logger import setup_logger


def check_token() -> tuple[bool, str]:
    """Check if HTB_API_TOKEN is configured."""
    token = htb_api_token()
    if not token:
        return False, "[X] HTB_API_TOKEN is not set (add it to .env or export it)"
    return True, f"[OK] HTB_API_TOKEN is set: {token[:6]}..."


def check_active_machine(client: HTBClient) -> tuple[bool, str]:
    """Ask the API for the active machine; 'none running' still proves the token works."""
    try:
        machine = client.get_active_lab_machine()
    except NoActiveLabMachine:
        return True, "[OK] HTB API reachable (no active lab machine)"
    except HTBClientError as e:
        return False, f"[X] HTB API check failed: {e}"
    return True, f"[OK] Active lab machine: {machine.name or machine.id} ({machine.ip or 'no ip yet'})"


def check_vpn_servers(client: HTBClient) -> tuple[bool, list[str]]:
    """List lab VPN servers with their subscription tier."""
    try:
        servers = client.get_vpn_servers(PRODUCT_LABS)
    except HTBClientError as e:
        return False, [f"[X] Could not list VPN servers: {e}"]

    lines = [f"[OK] {len(servers)} lab VPN servers"]
    for server in servers:
        try:
            tier = server.subscription_type()
        except UnknownSubscriptionTier:
            tier = "unknown"
        lines.append(f"     {server.id}: {server.friendly_name} [{tier}] {server.location}")
    return True, lines


def main() -> int:
    """Run all verification checks."""
    setup_logger()

    print("Verifying HTB client setup\n")
    print("=" * 60)

    print("\n1. Checking HTB_API_TOKEN...")
    ok, msg = check_token()
    print(f"   {msg}")
    if not ok:
        print("\n[X] Token missing. Nothing else to check.")
        return 1

    all_checks_passed = True
    with HTBClient() as client:
        print("\n2. Checking HTB API access...")
        ok, msg = check_active_machine(client)
        print(f"   {msg}")
        if not ok:
            all_checks_passed = False

        # Don't fail overall on this one; some accounts have no lab access.
        print("\n3. Listing lab VPN servers (Optional)...")
        _, msgs = check_vpn_servers(client)
        for msg in msgs:
            print(f"   {msg}")

    print("\n" + "=" * 60)
    if all_checks_passed:
        print("\n[OK] All critical checks passed!")
        return 0
    print("\n[X] Some checks failed. Please fix the issues above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
