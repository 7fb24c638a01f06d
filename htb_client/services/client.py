"""
HTB API client: one method per platform capability.

Each method builds a request, interprets the response and applies its own
result rule (e.g. exactly one machine must match a name).
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass, field
from typing import Any

import requests

from htb_client.domains.models.machine import Machine, parse_machines
from htb_client.domains.models.vpn_server import VPNServer, VPNServersData
from htb_client.errors import (
    MachineNotFound,
    MultipleMachinesFound,
    NoActiveLabMachine,
    NoAssignedVPNServer,
)
from htb_client.infrastructure.api.paths import (
    HTB_HOST,
    MACHINES_PAGE_SIZE,
    PATH_ACTIVE_LAB_MACHINE,
    PATH_LIST_ACTIVE_LAB_MACHINES,
    PATH_LIST_RETIRED_LAB_MACHINES,
    PATH_SPAWN_LAB_MACHINE,
    PATH_TERMINATE_LAB_MACHINE,
    PATH_VPN_SERVERS,
    QUERY_KEY_KEYWORD,
    QUERY_KEY_PER_PAGE,
    QUERY_KEY_PRODUCT,
    HTBProduct,
)
from htb_client.infrastructure.api.request import RequestOptions, build_request
from htb_client.infrastructure.api.responses import execute, fetch_data, fetch_info
from htb_client.utils.config import htb_api_token, htb_timeout_seconds
from htb_client.utils.logger import get_logger

logger = get_logger()


@dataclass(frozen=True)
class ClientOptions:
    """Client configuration, read-only once the client is built."""

    auth_token: str = ""
    session: requests.Session = field(default_factory=requests.Session)
    timeout: float | None = 30.0
    host: str = HTB_HOST


class HTBClient:
    """
    Synchronous HTB API client.

    The session is the only shared state; it is never mutated by the client.
    Pass one in to control pooling, proxies or adapters. A session created
    here is closed by close() / on leaving a `with` block.

    Args:
        auth_token: Bearer token. Defaults to HTB_API_TOKEN.
        session: Transport. Defaults to a new requests.Session.
        timeout: Per-request deadline in seconds. Defaults to HTB_TIMEOUT_SECONDS.
    """

    def __init__(
        self,
        auth_token: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self._owns_session = session is None
        self._opts = ClientOptions(
            auth_token=auth_token if auth_token is not None else htb_api_token(),
            session=session if session is not None else requests.Session(),
            timeout=timeout if timeout is not None else htb_timeout_seconds(),
        )

    @property
    def options(self) -> ClientOptions:
        return self._opts

    def __enter__(self) -> HTBClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self._opts.session.close()

    def _request(self, **options: Any) -> requests.PreparedRequest:
        return build_request(
            RequestOptions(auth_token=self._opts.auth_token, **options),
            host=self._opts.host,
        )

    def _find_machine_by_name(self, path: str, name: str) -> Machine:
        request = self._request(
            path=path,
            query={
                QUERY_KEY_PER_PAGE: str(MACHINES_PAGE_SIZE),
                QUERY_KEY_KEYWORD: name,
            },
        )
        machines = fetch_data(self._opts.session, request, parse_machines, self._opts.timeout).data

        # The keyword filter matches substrings, so several hits are possible.
        if not machines:
            raise MachineNotFound(name)
        if len(machines) > 1:
            logger.warning("Keyword %r matched %d machines", name, len(machines))
            raise MultipleMachinesFound(name)
        return machines[0]

    def find_active_machine_by_name(self, name: str) -> Machine:
        """
        Return the active machine whose name matches `name`.

        Raises:
            MachineNotFound: If nothing matches.
            MultipleMachinesFound: If more than one machine matches.
        """
        return self._find_machine_by_name(PATH_LIST_ACTIVE_LAB_MACHINES, name)

    def find_retired_machine_by_name(self, name: str) -> Machine:
        """Same as find_active_machine_by_name, over the retired machines listing."""
        return self._find_machine_by_name(PATH_LIST_RETIRED_LAB_MACHINES, name)

    def get_active_lab_machine(self) -> Machine:
        """
        Return the machine currently running for the account.

        Raises:
            NoActiveLabMachine: If no machine is running.
        """
        request = self._request(path=PATH_ACTIVE_LAB_MACHINE)
        machine = fetch_info(self._opts.session, request, Machine.from_dict, self._opts.timeout).info
        if machine is None:
            raise NoActiveLabMachine()
        return machine

    def _vpn_servers_data(self, product: HTBProduct) -> VPNServersData:
        request = self._request(
            path=PATH_VPN_SERVERS,
            query={QUERY_KEY_PRODUCT: product},
        )
        return fetch_data(self._opts.session, request, VPNServersData.from_dict, self._opts.timeout).data

    def get_assigned_vpn_server(self, product: HTBProduct) -> VPNServer:
        """
        Return the VPN server assigned to the account for `product`.

        Raises:
            NoAssignedVPNServer: If none is assigned.
        """
        assigned = self._vpn_servers_data(product).assigned
        if assigned is None:
            raise NoAssignedVPNServer()
        return assigned

    def get_vpn_servers(self, product: HTBProduct) -> list[VPNServer]:
        """Return every VPN server offered for `product`, flattened. Empty if none."""
        servers = self._vpn_servers_data(product).servers()
        logger.info("Fetched %d VPN servers for %s", len(servers), product)
        return servers

    def _machine_action(self, path: str, machine_id: int) -> None:
        if isinstance(machine_id, bool) or not isinstance(machine_id, int) or machine_id < 0:
            raise ValueError(f"machine id must be a non-negative integer, got {machine_id!r}")
        payload = json.dumps({"machine_id": machine_id}).encode("utf-8")
        with io.BytesIO(payload) as body:
            request = self._request(
                path=path,
                method="POST",
                body=body,
                is_json=True,
            )
            execute(self._opts.session, request, self._opts.timeout)

    def spawn_lab_machine(self, machine_id: int) -> None:
        """Spawn the lab machine with the given id."""
        self._machine_action(PATH_SPAWN_LAB_MACHINE, machine_id)
        logger.info("Spawn requested for machine %s", machine_id)

    def terminate_lab_machine(self, machine_id: int) -> None:
        """Terminate the lab machine with the given id."""
        self._machine_action(PATH_TERMINATE_LAB_MACHINE, machine_id)
        logger.info("Termination requested for machine %s", machine_id)
