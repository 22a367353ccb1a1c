"""Valve A2S server info queries."""

from dataclasses import dataclass, field

import a2s

from valman.core.errors import GameQueryError

DEFAULT_QUERY_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class GameSnapshot:
    """Point-in-time view of the game server."""
    server_name: str
    version: str
    player_count: int
    max_player_count: int
    # Valheim leaves the A2S player roster empty, so it is never queried.
    players: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class GameQueryClient:
    """A2S client handle: protocol timeout and string encoding."""
    timeout: float = DEFAULT_QUERY_TIMEOUT_SECONDS
    encoding: str = "utf-8"

    def info(self, address):
        return a2s.info(address, timeout=self.timeout, encoding=self.encoding)


def parse_address(value):
    """Parse ``host:port`` into an address tuple."""
    host, sep, port = (value or "").strip().rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"Invalid game server address: {value!r}")
    return host.strip("[]"), int(port)


def get_info(client, address):
    """Return a ``GameSnapshot`` from a single A2S info request."""
    try:
        info = client.info(address)
    except (OSError, a2s.BrokenMessageError, a2s.BufferExhaustedError) as exc:
        raise GameQueryError(f"A2S info query to {address[0]}:{address[1]} failed: {exc}") from exc

    return GameSnapshot(
        server_name=info.server_name,
        version=getattr(info, "keywords", None) or info.version,
        player_count=info.player_count,
        max_player_count=info.max_players,
    )
