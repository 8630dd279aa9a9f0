"""Player-service boundary: HTTP client, remote agent and transcript upload."""

from wgm.remote.agent import RemoteAgent, parse_response
from wgm.remote.client import PlayerServiceClient, RemoteTranscriptStore, ServiceUnavailableError

__all__ = [
    "RemoteAgent",
    "parse_response",
    "PlayerServiceClient",
    "RemoteTranscriptStore",
    "ServiceUnavailableError",
]
