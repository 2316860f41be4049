"""Chess.com API HTTP client with timeouts, retry with backoff, and error mapping."""

import asyncio
from typing import Any, Awaitable, Callable, Optional

import httpx
import structlog
from pydantic import ValidationError

from cheat_risk.core.config import get_global_settings
from .endpoints import ChessAPIEndpoints
from .errors import (
    ChessAPIError,
    RateLimitError,
    NotFoundError,
    ServiceUnavailableError,
    BadRequestError,
)
from .models import ArchiveDTO, GameDTO, ProfileDTO, StatsDTO

logger = structlog.get_logger(__name__)


class ChessAPIClient:
    """Client for the chess.com published-data API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_base_seconds: Optional[float] = None,
        max_backoff_seconds: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize chess.com API client.

        Args:
            base_url: API root (uses config if None)
            timeout_seconds: Per-request timeout (uses config if None)
            max_retries: Retries on 5xx, 429 and transport errors
            backoff_base_seconds: First retry delay, doubled on each attempt
            max_backoff_seconds: Upper bound of any retry delay, including a
                server-sent Retry-After
            user_agent: User-Agent header sent with every request
            transport: Optional httpx transport, e.g. a MockTransport in tests
            sleep: Coroutine used between retries
        """
        settings = get_global_settings()
        self.base_url = base_url or settings.chess_api_base_url
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else settings.chess_api_timeout_seconds
        )
        self.max_retries = (
            max_retries if max_retries is not None else settings.chess_api_max_retries
        )
        self.backoff_base_seconds = (
            backoff_base_seconds
            if backoff_base_seconds is not None
            else settings.chess_api_backoff_base_seconds
        )
        self.max_backoff_seconds = (
            max_backoff_seconds
            if max_backoff_seconds is not None
            else settings.chess_api_max_backoff_seconds
        )
        self.user_agent = user_agent or settings.chess_api_user_agent
        self.endpoints = ChessAPIEndpoints(self.base_url)
        self._transport = transport
        self._sleep = sleep

        # HTTP session
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        "Accept": "application/json",
                        "User-Agent": self.user_agent,
                    }
                    self.session = httpx.AsyncClient(
                        headers=headers,
                        timeout=httpx.Timeout(self.timeout_seconds),
                        transport=self._transport,
                    )
                    logger.info(
                        "Chess.com API client session started",
                        base_url=self.base_url,
                        timeout_seconds=self.timeout_seconds,
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Chess.com API client session closed")

    def _backoff_delay(self, attempt: int) -> float:
        return min(self.backoff_base_seconds * (2**attempt), self.max_backoff_seconds)

    def _raise_client_error_if_needed(self, status: int, url: str) -> None:
        """Raise specific ChessAPIError subclass for client errors."""
        if status == 400:
            raise BadRequestError("Invalid request", status_code=status, url=url)
        elif status in (404, 410):
            raise NotFoundError("Resource not found", status_code=status, url=url)

    def _handle_retryable_status(
        self, status: int, headers: httpx.Headers, url: str, attempt: int
    ) -> float:
        """
        Decide the delay before retrying a 429 or 5xx response.

        Raises:
            RateLimitError, ServiceUnavailableError, ChessAPIError: when the
                retry budget is spent
        """
        retry_after = headers.get("Retry-After")
        if attempt < self.max_retries:
            if status == 429 and retry_after and retry_after.isdigit():
                return min(float(retry_after), self.max_backoff_seconds)
            return self._backoff_delay(attempt)

        if status == 429:
            raise RateLimitError(
                "Rate limit exceeded",
                status_code=status,
                retry_after=float(retry_after)
                if retry_after and retry_after.isdigit()
                else None,
                url=url,
            )
        if status == 503:
            raise ServiceUnavailableError(
                "Service unavailable", status_code=status, url=url
            )
        raise ChessAPIError(f"Server error {status}", status_code=status, url=url)

    async def _make_request(self, url: str) -> Any:
        """
        GET a URL with retry logic.

        Args:
            url: Request URL

        Returns:
            Decoded JSON response

        Raises:
            ChessAPIError: For API errors
        """
        await self.start_session()

        if self.session is None:
            raise ChessAPIError("Session not initialized", url=url)

        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            try:
                response = await self.session.get(url)
            except (httpx.RequestError, asyncio.TimeoutError) as e:
                last_error = e
                logger.warning(
                    "Chess.com request failed",
                    url=url,
                    attempt=attempt,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                if attempt < self.max_retries:
                    await self._sleep(self._backoff_delay(attempt))
                continue

            status = response.status_code
            if status == 200:
                try:
                    return response.json()
                except ValueError as e:
                    raise ChessAPIError(
                        "Invalid JSON response", status_code=status, url=url
                    ) from e

            self._raise_client_error_if_needed(status, url)

            if status == 429 or status >= 500:
                delay = self._handle_retryable_status(
                    status, response.headers, url, attempt
                )
                logger.warning(
                    "Retryable chess.com response",
                    url=url,
                    status_code=status,
                    attempt=attempt,
                    retry_in_seconds=delay,
                )
                await self._sleep(delay)
                continue

            raise ChessAPIError(
                f"Unexpected status {status}", status_code=status, url=url
            )

        raise ChessAPIError(f"Request failed: {str(last_error)}", url=url)

    # Player endpoints

    async def get_player_profile(self, username: str) -> ProfileDTO:
        """Get player profile (join date, canonical username)."""
        url = self.endpoints.player_profile(username)
        response = await self._make_request(url)
        try:
            return ProfileDTO.model_validate(response)
        except ValidationError as e:
            raise ChessAPIError("Invalid profile data structure", url=url) from e

    async def get_player_stats(self, username: str) -> StatsDTO:
        """Get per-format ratings and all-time records."""
        url = self.endpoints.player_stats(username)
        response = await self._make_request(url)
        try:
            return StatsDTO.model_validate(response)
        except ValidationError as e:
            raise ChessAPIError("Invalid stats data structure", url=url) from e

    async def get_monthly_archive(
        self, username: str, year: int, month: int
    ) -> ArchiveDTO:
        """
        Get one month of archived games.

        Games that do not match the expected shape are skipped rather than
        failing the whole month.
        """
        url = self.endpoints.monthly_archive(username, year, month)
        response = await self._make_request(url)
        raw_games = response.get("games", []) if isinstance(response, dict) else []

        games = []
        skipped = 0
        for raw_game in raw_games:
            try:
                games.append(GameDTO.model_validate(raw_game))
            except ValidationError:
                skipped += 1

        if skipped:
            logger.debug(
                "Skipped malformed archived games",
                url=url,
                skipped=skipped,
                kept=len(games),
            )
        return ArchiveDTO(games=games)

