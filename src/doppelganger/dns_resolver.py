"""
DNS resolver for registered candidates.

Forward (A/AAAA) and reverse (PTR) lookups with dnspython. Both are best
effort: any resolution failure yields an empty list and is never raised.
The blocking dnspython calls run on an executor so the event loop keeps
serving other workers.
"""

import asyncio
import ipaddress
import zlib
from concurrent.futures import Executor
from typing import Optional

import dns.exception
import dns.resolver
import dns.reversename


class DNSResolver:
    """Best-effort forward and reverse DNS lookups."""

    RECORD_TYPES = ("A", "AAAA")

    def __init__(
        self,
        nameservers: Optional[list[str]] = None,
        timeout: float = 3.0,
        simulation_mode: bool = False,
        executor: Optional[Executor] = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            nameservers: Nameserver IPs to use instead of the system ones
            timeout: Per-server timeout in seconds
            simulation_mode: If True, answer from a synthetic table
            executor: Executor running the blocking lookups
        """
        self._nameservers = list(nameservers or [])
        self._timeout = timeout
        self._simulation_mode = simulation_mode
        self._executor = executor

    def _make_resolver(self) -> dns.resolver.Resolver:
        if self._nameservers:
            resolver = dns.resolver.Resolver(configure=False)
            resolver.nameservers = list(self._nameservers)
        else:
            resolver = dns.resolver.Resolver()
        resolver.timeout = self._timeout
        resolver.lifetime = max(self._timeout * 2, self._timeout + 1.0)
        return resolver

    async def lookup_host(self, name: str) -> list[str]:
        """
        Resolve a host name to its IPv4 and IPv6 addresses.

        Returns:
            Unique addresses, IPv4 first; empty on failure
        """
        if not name:
            return []
        if self._simulation_mode:
            return self._simulated_addresses(name)

        loop = asyncio.get_running_loop()

        def sync_resolve() -> list[str]:
            try:
                resolver = self._make_resolver()
            except dns.exception.DNSException:
                return []

            ips: list[str] = []
            for qtype in self.RECORD_TYPES:
                try:
                    answers = resolver.resolve(name, qtype)
                except dns.resolver.NXDOMAIN:
                    return []
                except (
                    dns.resolver.NoAnswer,
                    dns.resolver.NoNameservers,
                    dns.resolver.YXDOMAIN,
                    dns.exception.Timeout,
                ):
                    continue
                except dns.exception.DNSException:
                    continue

                for rr in answers:
                    ip_text = str(rr).strip()
                    try:
                        ipaddress.ip_address(ip_text)
                    except ValueError:
                        continue
                    if ip_text not in ips:
                        ips.append(ip_text)
            return ips

        return await loop.run_in_executor(self._executor, sync_resolve)

    async def lookup_addr(self, address: str) -> list[str]:
        """
        Reverse-resolve an IP address to host names.

        Returns:
            Unique host names without the trailing dot; empty on failure
        """
        try:
            ipaddress.ip_address(address)
        except ValueError:
            return []
        if self._simulation_mode:
            return self._simulated_names(address)

        loop = asyncio.get_running_loop()

        def sync_reverse() -> list[str]:
            try:
                resolver = self._make_resolver()
                answers = resolver.resolve(dns.reversename.from_address(address), "PTR")
            except dns.exception.DNSException:
                return []

            names: list[str] = []
            for rr in answers:
                name = str(rr).strip().rstrip(".").lower()
                if name and name not in names:
                    names.append(name)
            return names

        return await loop.run_in_executor(self._executor, sync_reverse)

    @staticmethod
    def _simulated_addresses(name: str) -> list[str]:
        # Deterministic across runs, unlike hash()
        octet = zlib.crc32(name.lower().encode("utf-8")) % 254 + 1
        return [f"192.0.2.{octet}"]

    @staticmethod
    def _simulated_names(address: str) -> list[str]:
        return [f"host-{address.replace('.', '-').replace(':', '-')}.example-hosting.test"]
