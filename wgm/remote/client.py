"""HTTP client for the player service.

The player service hosts the decision agents; the game master only talks to
it through these endpoints:

    POST /api/players/{id}/start-game
    POST /api/players/{id}/speak
    POST /api/players/{id}/vote
    POST /api/players/{id}/use-ability
    POST /api/game-logs
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from wgm.core.exceptions import AgentError, TranscriptError
from wgm.logging.transcript import GameTranscript, TranscriptStore


class ServiceUnavailableError(AgentError):
    """5xx or connection failure; worth retrying."""

    pass


class PlayerServiceClient:
    """Thin async client around the player service REST API."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        request_timeout: float = 60.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize client.

        Args:
            base_url: Player service root URL
            request_timeout: Per-request timeout in seconds
            session: Shared aiohttp session (one is opened per request if None)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=request_timeout)
        self._session = session
        self._owns_session = False

        self.stats = {"requests": 0, "errors": 0}

    async def __aenter__(self) -> "PlayerServiceClient":
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
            self._owns_session = False

    def player_url(self, player_id: int, action: str) -> str:
        return f"{self.base_url}/api/players/{player_id}/{action}"

    async def start_game(self, player_id: int, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.post(self.player_url(player_id, "start-game"), params)

    async def speak(self, player_id: int, context: Dict[str, Any]) -> Dict[str, Any]:
        return await self.post(self.player_url(player_id, "speak"), context)

    async def vote(self, player_id: int, context: Dict[str, Any]) -> Dict[str, Any]:
        return await self.post(self.player_url(player_id, "vote"), context)

    async def use_ability(self, player_id: int, context: Dict[str, Any]) -> Dict[str, Any]:
        return await self.post(self.player_url(player_id, "use-ability"), context)

    async def save_game_log(self, game_log: Dict[str, Any]) -> Dict[str, Any]:
        return await self.post(f"{self.base_url}/api/game-logs", game_log)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(ServiceUnavailableError),
        reraise=True,
    )
    async def post(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST JSON and return the decoded JSON body.

        Raises:
            ServiceUnavailableError: On connection errors or 5xx (retried)
            AgentError: On 4xx or a body that is not a JSON object
        """
        self.stats["requests"] += 1
        try:
            if self._session is not None:
                return await self._post(self._session, url, payload)
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                return await self._post(session, url, payload)
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as e:
            self.stats["errors"] += 1
            raise ServiceUnavailableError(f"Player service unreachable: {e}", details={"url": url})
        except AgentError:
            self.stats["errors"] += 1
            raise

    async def _post(self, session: aiohttp.ClientSession, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        async with session.post(url, json=payload) as resp:
            if resp.status >= 500:
                raise ServiceUnavailableError(
                    f"Player service error (status {resp.status})",
                    details={"url": url, "error": await resp.text()},
                )
            if resp.status != 200:
                raise AgentError(
                    f"Player service rejected request (status {resp.status})",
                    details={"url": url, "error": await resp.text()},
                )
            try:
                data = await resp.json(content_type=None)
            except ValueError as e:
                raise AgentError(f"Invalid JSON from player service: {e}", details={"url": url})

        if not isinstance(data, dict):
            raise AgentError("Player service returned a non-object body", details={"url": url})
        return data


class RemoteTranscriptStore(TranscriptStore):
    """Posts finalized transcripts to the player service's game-log endpoint."""

    def __init__(self, client: PlayerServiceClient):
        self.client = client

    async def save(self, transcript: GameTranscript) -> None:
        try:
            await self.client.save_game_log(transcript.to_dict())
        except AgentError as e:
            raise TranscriptError(
                f"Failed to upload transcript {transcript.game_id}",
                details={"error": str(e)},
            )
