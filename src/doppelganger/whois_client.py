"""
WHOIS Client module for registration lookups.

This module provides a WHOIS client that speaks the plain port-43 protocol:
send the domain followed by CRLF, read until the server closes the
connection. Servers come from the static registry table, from custom
configuration, or from a referral by the IANA root server.
"""

import asyncio
import socket
from concurrent.futures import Executor
from typing import Optional

import idna

from .enums import WHOISErrorCode
from .exceptions import NetworkError, ValidationError
from .tld_registry import IANA_WHOIS_SERVER, WHOIS_PORT, lookup_whois_server


class WHOISClient:
    """
    WHOIS client returning raw response text.

    Every failure (no server for the TLD, socket error, timeout) is raised
    as a NetworkError; deciding what a failure means is up to the caller.
    """

    # Servers that need more than the bare domain to return a full record
    QUERY_FORMATS: dict[str, str] = {
        "whois.denic.de": "-T dn,ace {domain}",
    }

    # Lines in an IANA answer that name the registry WHOIS server
    REFERRAL_KEYS = ("refer:", "whois:")

    def __init__(
        self,
        timeout: float = 10.0,
        custom_servers: Optional[dict[str, str]] = None,
        follow_referrals: bool = True,
        simulation_mode: bool = False,
        executor: Optional[Executor] = None,
    ) -> None:
        """
        Initialize the WHOIS client.

        Args:
            timeout: Socket timeout in seconds
            custom_servers: Optional suffix to server overrides
            follow_referrals: Ask the IANA root server for unknown TLDs
            simulation_mode: If True, no real network requests are made
            executor: Executor running the blocking socket calls
                (the event loop default when None)
        """
        self._timeout = timeout
        self._custom_servers = {k.lower(): v for k, v in (custom_servers or {}).items()}
        self._follow_referrals = follow_referrals
        self._simulation_mode = simulation_mode
        self._executor = executor
        # TLD -> discovery task resolving to the server, '' when IANA had none
        self._referrals: dict[str, asyncio.Future] = {}

    async def query(self, domain: str) -> str:
        """
        Query WHOIS for a domain.

        Args:
            domain: Domain to look up, Unicode or ASCII

        Returns:
            Raw WHOIS response text

        Raises:
            ValidationError: If the domain is empty
            NetworkError: If no server is known or the query fails
        """
        if not domain or not domain.strip():
            raise ValidationError(
                code=WHOISErrorCode.EMPTY_DOMAIN.value,
                message="Cannot query WHOIS for an empty domain",
            )

        if self._simulation_mode:
            return self._get_simulated_response(domain)

        server = await self.get_server(domain)
        if not server:
            raise NetworkError(
                code=WHOISErrorCode.NO_SERVER.value,
                message=f"No WHOIS server known for {domain}",
                details={"domain": domain},
            )

        query_format = self.QUERY_FORMATS.get(server, "{domain}")
        return await self._execute_whois_query(query_format.format(domain=domain), server)

    async def get_server(self, domain: str) -> Optional[str]:
        """Return the WHOIS server responsible for a domain."""
        server = lookup_whois_server(domain, self._custom_servers) or lookup_whois_server(domain)
        if server or not self._follow_referrals:
            return server

        tld = self._extract_tld(domain)
        discovery = self._referrals.get(tld)
        if discovery is None:
            # Concurrent callers for the same TLD share one IANA query
            discovery = asyncio.ensure_future(self._discover_server(tld))
            self._referrals[tld] = discovery
        # A cancelled caller must not cancel the shared discovery
        return (await asyncio.shield(discovery)) or None

    async def _discover_server(self, tld: str) -> str:
        """Ask the IANA root server which server handles a TLD."""
        try:
            response = await self._execute_whois_query(tld, IANA_WHOIS_SERVER)
        except NetworkError:
            return ""
        return self.parse_referral(response)

    @classmethod
    def parse_referral(cls, response: str) -> str:
        """Extract the referred WHOIS server from an IANA response."""
        for line in response.splitlines():
            stripped = line.strip().lower()
            for key in cls.REFERRAL_KEYS:
                if stripped.startswith(key):
                    server = stripped[len(key):].strip()
                    if server:
                        return server
        return ""

    async def _execute_whois_query(self, query: str, server: str) -> str:
        """
        Execute the actual WHOIS query via socket.

        Args:
            query: Query line (usually the domain)
            server: WHOIS server hostname

        Returns:
            Raw WHOIS response as string

        Raises:
            NetworkError: On socket errors and timeouts
        """
        loop = asyncio.get_running_loop()

        def _sync_query() -> str:
            with socket.create_connection((server, WHOIS_PORT), timeout=self._timeout) as sock:
                sock.sendall(f"{query}\r\n".encode("utf-8"))

                response_parts: list[bytes] = []
                while True:
                    data = sock.recv(4096)
                    if not data:
                        break
                    response_parts.append(data)

                return b"".join(response_parts).decode("utf-8", errors="replace")

        try:
            return await asyncio.wait_for(
                loop.run_in_executor(self._executor, _sync_query),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            raise NetworkError(
                code=WHOISErrorCode.TIMEOUT.value,
                message=f"WHOIS query to {server} timed out after {self._timeout}s",
                details={"server": server, "query": query},
            )
        except OSError as e:
            raise NetworkError(
                code=WHOISErrorCode.NETWORK_ERROR.value,
                message=f"Socket error talking to {server}: {e}",
                details={"server": server, "query": query},
            )

    @staticmethod
    def _extract_tld(domain: str) -> str:
        """Extract the ASCII TLD from a domain string."""
        tld = domain.lower().rstrip(".").rsplit(".", 1)[-1]
        try:
            return idna.encode(tld, uts46=True).decode("ascii")
        except idna.IDNAError:
            return tld

    def _get_simulated_response(self, domain: str) -> str:
        """
        Return a simulated response for testing.

        In simulation mode, domains whose first label starts with
        'available-' get a "no match" answer, others a registered record.
        """
        sld = domain.split(".")[0]

        if sld.startswith("available-"):
            return f'[SIMULATED]\nNo match for "{domain.upper()}".\n'

        return (
            "[SIMULATED]\n"
            f"Domain Name: {domain.upper()}\n"
            "Registrar: Example Registrar, Inc.\n"
            "Registrar URL: http://www.example-registrar.test\n"
            "Updated Date: 2024-01-01T00:00:00Z\n"
            "Creation Date: 2020-01-01T00:00:00Z\n"
            "Registry Expiry Date: 2030-01-01T00:00:00Z\n"
            "Name Server: NS1.EXAMPLE-DNS.TEST\n"
            "Name Server: NS2.EXAMPLE-DNS.TEST\n"
        )
