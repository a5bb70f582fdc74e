"""
Property-based tests for the WHOIS client.

Network access is replaced by patching the socket query, so these tests
verify server selection, referral handling, error mapping and simulation
mode without touching the network.
"""

import asyncio
import socket
import string
from unittest.mock import AsyncMock, patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from doppelganger.enums import WHOISErrorCode
from doppelganger.exceptions import NetworkError, ValidationError
from doppelganger.tld_registry import IANA_WHOIS_SERVER, WHOIS_SERVERS, lookup_whois_server
from doppelganger.whois_client import WHOISClient


def valid_domain(tlds: list[str]) -> st.SearchStrategy[str]:
    """Generate valid domain names for testing."""
    label = st.text(
        alphabet=string.ascii_lowercase + string.digits,
        min_size=1,
        max_size=20,
    )
    return st.builds(lambda l, t: f"{l}.{t}", label, st.sampled_from(tlds))


class TestServerSelectionProperty:
    """
    Property 10: Known suffixes map to their registry server.
    """

    @given(domain=valid_domain(["com", "net", "org", "de", "eu"]))
    @settings(max_examples=100)
    def test_static_table(self, domain: str) -> None:
        """Property 10a: Static table entries are used without referral."""
        client = WHOISClient()
        tld = domain.rsplit(".", 1)[-1]

        server = asyncio.run(client.get_server(domain))

        assert server == WHOIS_SERVERS[tld]

    def test_custom_server_overrides_table(self) -> None:
        client = WHOISClient(custom_servers={"COM": "whois.example.test"})
        assert asyncio.run(client.get_server("abc.com")) == "whois.example.test"

    def test_longest_suffix_wins(self) -> None:
        servers = {"uk": "whois.short.test", "co.uk": "whois.long.test"}
        assert lookup_whois_server("example.co.uk", servers) == "whois.long.test"
        assert lookup_whois_server("example.uk", servers) == "whois.short.test"

    def test_unknown_tld_asks_iana_once(self) -> None:
        client = WHOISClient()
        referral = "domain: ZZTEST\nrefer:        whois.nic.zztest\n"

        with patch.object(
            client, "_execute_whois_query", new=AsyncMock(return_value=referral)
        ) as mock_query:
            first = asyncio.run(client.get_server("a.zztest"))
            second = asyncio.run(client.get_server("b.zztest"))

        assert first == "whois.nic.zztest"
        assert second == "whois.nic.zztest"
        mock_query.assert_awaited_once_with("zztest", IANA_WHOIS_SERVER)

    def test_concurrent_lookups_share_one_referral(self) -> None:
        client = WHOISClient()
        referral = "domain: ZZTEST\nrefer:        whois.nic.zztest\n"

        async def slow_referral(query: str, server: str) -> str:
            await asyncio.sleep(0.01)
            return referral

        async def lookup_all() -> list:
            return await asyncio.gather(
                *(client.get_server(f"name{i}.zztest") for i in range(8))
            )

        with patch.object(
            client, "_execute_whois_query", new=AsyncMock(side_effect=slow_referral)
        ) as mock_query:
            servers = asyncio.run(lookup_all())

        assert servers == ["whois.nic.zztest"] * 8
        mock_query.assert_awaited_once_with("zztest", IANA_WHOIS_SERVER)

    def test_referrals_disabled(self) -> None:
        client = WHOISClient(follow_referrals=False)
        assert asyncio.run(client.get_server("a.zztest")) is None

    @pytest.mark.parametrize(
        "response,expected",
        [
            ("refer: whois.nic.io\n", "whois.nic.io"),
            ("whois:        whois.nic.abc\n", "whois.nic.abc"),
            ("domain: X\nstatus: ACTIVE\n", ""),
            ("", ""),
        ],
    )
    def test_parse_referral(self, response: str, expected: str) -> None:
        assert WHOISClient.parse_referral(response) == expected


class TestQueryErrorsProperty:
    """
    Property 11: Every query failure surfaces as a typed error.
    """

    @pytest.mark.parametrize("domain", ["", "   "])
    def test_empty_domain(self, domain: str) -> None:
        client = WHOISClient()
        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(client.query(domain))
        assert exc_info.value.code == WHOISErrorCode.EMPTY_DOMAIN.value

    def test_no_server(self) -> None:
        client = WHOISClient(follow_referrals=False)
        with pytest.raises(NetworkError) as exc_info:
            asyncio.run(client.query("example.zztest"))
        assert exc_info.value.code == WHOISErrorCode.NO_SERVER.value

    def test_socket_error_is_network_error(self) -> None:
        client = WHOISClient(timeout=1.0)
        with patch(
            "doppelganger.whois_client.socket.create_connection",
            side_effect=ConnectionRefusedError("refused"),
        ):
            with pytest.raises(NetworkError) as exc_info:
                asyncio.run(client.query("example.com"))
        assert exc_info.value.code == WHOISErrorCode.NETWORK_ERROR.value

    def test_socket_timeout_is_network_error(self) -> None:
        client = WHOISClient(timeout=1.0)
        with patch(
            "doppelganger.whois_client.socket.create_connection",
            side_effect=socket.timeout("timed out"),
        ):
            with pytest.raises(NetworkError):
                asyncio.run(client.query("example.com"))

    def test_denic_query_format(self) -> None:
        client = WHOISClient()
        with patch.object(
            client, "_execute_whois_query", new=AsyncMock(return_value="Domain: x.de\n")
        ) as mock_query:
            asyncio.run(client.query("beispiel.de"))

        mock_query.assert_awaited_once_with("-T dn,ace beispiel.de", "whois.denic.de")


class TestSimulationModeProperty:
    """
    Property 12: Simulation mode answers without opening sockets.
    """

    @given(domain=valid_domain(["com", "net", "de", "zztest"]))
    @settings(max_examples=100)
    def test_no_network(self, domain: str) -> None:
        """Property 12a: Registered-looking record for ordinary names."""
        client = WHOISClient(simulation_mode=True)

        with patch("doppelganger.whois_client.socket.create_connection") as mock_connect:
            response = asyncio.run(client.query(domain))

        mock_connect.assert_not_called()
        assert "[SIMULATED]" in response
        assert f"Domain Name: {domain.upper()}" in response

    @given(label=st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=10))
    @settings(max_examples=50)
    def test_available_prefix(self, label: str) -> None:
        """Property 12b: 'available-' names get a no-match answer."""
        client = WHOISClient(simulation_mode=True)

        response = asyncio.run(client.query(f"available-{label}.com"))

        assert "No match for" in response
