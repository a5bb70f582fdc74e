"""
Property-based tests for the DNS resolver.

dnspython's Resolver is replaced with a fake so forward and reverse lookups
can be exercised without network access.
"""

import asyncio
import ipaddress
import string
from unittest.mock import MagicMock, patch

import dns.exception
import dns.resolver
from hypothesis import given, settings
from hypothesis import strategies as st

from doppelganger.dns_resolver import DNSResolver


class FakeResolver:
    """Answers from fixed tables; raises NXDOMAIN for unknown names."""

    def __init__(self, forward: dict, reverse: dict, fail_types: tuple = ()) -> None:
        self.forward = forward
        self.reverse = reverse
        self.fail_types = fail_types
        self.timeout = None
        self.lifetime = None
        self.nameservers = []

    def resolve(self, qname, rdtype):
        if rdtype in self.fail_types:
            raise dns.exception.Timeout()
        if rdtype == "PTR":
            key = str(qname)
            if key not in self.reverse:
                raise dns.resolver.NXDOMAIN()
            return list(self.reverse[key])
        records = self.forward.get(qname)
        if records is None:
            raise dns.resolver.NXDOMAIN()
        answers = records.get(rdtype)
        if not answers:
            raise dns.resolver.NoAnswer()
        return list(answers)


def patched(fake: FakeResolver):
    return patch("doppelganger.dns_resolver.dns.resolver.Resolver", return_value=fake)


class TestForwardLookupProperty:
    """
    Property 13: Forward lookups return unique, valid addresses.
    """

    def test_ipv4_then_ipv6(self) -> None:
        fake = FakeResolver(
            forward={"example.com": {"A": ["192.0.2.1", "192.0.2.1"], "AAAA": ["2001:db8::1"]}},
            reverse={},
        )
        with patched(fake):
            addresses = asyncio.run(DNSResolver().lookup_host("example.com"))

        assert addresses == ["192.0.2.1", "2001:db8::1"]

    def test_nxdomain_gives_empty(self) -> None:
        with patched(FakeResolver(forward={}, reverse={})):
            assert asyncio.run(DNSResolver().lookup_host("missing.com")) == []

    def test_timeout_on_one_type_keeps_other(self) -> None:
        fake = FakeResolver(
            forward={"example.com": {"A": ["192.0.2.7"]}},
            reverse={},
            fail_types=("AAAA",),
        )
        with patched(fake):
            assert asyncio.run(DNSResolver().lookup_host("example.com")) == ["192.0.2.7"]

    def test_empty_name(self) -> None:
        assert asyncio.run(DNSResolver().lookup_host("")) == []

    def test_custom_nameservers(self) -> None:
        fake = FakeResolver(forward={"example.com": {"A": ["192.0.2.9"]}}, reverse={})
        with patched(fake) as mock_cls:
            resolver = DNSResolver(nameservers=["198.51.100.53"], timeout=2.0)
            asyncio.run(resolver.lookup_host("example.com"))

        mock_cls.assert_called_with(configure=False)
        assert fake.nameservers == ["198.51.100.53"]
        assert fake.timeout == 2.0
        assert fake.lifetime >= 2.0


class TestReverseLookupProperty:
    """
    Property 14: Reverse lookups return normalized, unique names.
    """

    def test_trailing_dot_and_case(self) -> None:
        fake = FakeResolver(
            forward={},
            reverse={"1.2.0.192.in-addr.arpa.": ["Host.Example.NET.", "host.example.net."]},
        )
        with patched(fake):
            names = asyncio.run(DNSResolver().lookup_addr("192.0.2.1"))

        assert names == ["host.example.net"]

    def test_no_ptr(self) -> None:
        with patched(FakeResolver(forward={}, reverse={})):
            assert asyncio.run(DNSResolver().lookup_addr("192.0.2.1")) == []

    @given(value=st.text(alphabet=string.ascii_letters + ".-", min_size=0, max_size=20))
    @settings(max_examples=50)
    def test_invalid_address_gives_empty(self, value: str) -> None:
        """Property 14a: Non-IP input never reaches the resolver."""
        mock_cls = MagicMock()
        with patch("doppelganger.dns_resolver.dns.resolver.Resolver", mock_cls):
            assert asyncio.run(DNSResolver().lookup_addr(value)) == []
        mock_cls.assert_not_called()


class TestSimulatedLookupProperty:
    """
    Property 15: Simulation mode is deterministic and offline.
    """

    @given(name=st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=20))
    @settings(max_examples=100)
    def test_deterministic_documentation_address(self, name: str) -> None:
        """Property 15a: The same name always maps to one 192.0.2.0/24 address."""
        resolver = DNSResolver(simulation_mode=True)
        mock_cls = MagicMock()
        with patch("doppelganger.dns_resolver.dns.resolver.Resolver", mock_cls):
            first = asyncio.run(resolver.lookup_host(f"{name}.com"))
            second = asyncio.run(resolver.lookup_host(f"{name}.com"))

        mock_cls.assert_not_called()
        assert first == second
        assert len(first) == 1
        assert ipaddress.ip_address(first[0]) in ipaddress.ip_network("192.0.2.0/24")

    def test_simulated_reverse(self) -> None:
        resolver = DNSResolver(simulation_mode=True)
        names = asyncio.run(resolver.lookup_addr("192.0.2.5"))
        assert names == ["host-192-0-2-5.example-hosting.test"]
