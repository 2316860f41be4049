"""URL builders for the chess.com published-data API."""

from urllib.parse import quote


class ChessAPIEndpoints:
    """Builds endpoint URLs relative to the configured base URL."""

    def __init__(self, base_url: str = "https://api.chess.com/pub"):
        self.base_url = base_url.rstrip("/")

    def _player(self, username: str) -> str:
        return f"{self.base_url}/player/{quote(username.strip().lower(), safe='')}"

    def player_profile(self, username: str) -> str:
        return self._player(username)

    def player_stats(self, username: str) -> str:
        return f"{self._player(username)}/stats"

    def monthly_archive(self, username: str, year: int, month: int) -> str:
        """Games archive of one calendar month; month is zero padded."""
        return f"{self._player(username)}/games/{year}/{month:02d}"
