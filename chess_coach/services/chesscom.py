from typing import Any, Optional

import httpx

from chess_coach.core.config import get_settings
from chess_coach.core.constants import (
    CHESSCOM_ENDPOINT_ARCHIVES,
    CHESSCOM_ENDPOINT_GAMES,
    CHESSCOM_ENDPOINT_PROFILE,
    CHESSCOM_ENDPOINT_STATS,
)
from chess_coach.core.logging import get_logger

logger = get_logger("chess_coach.chesscom")


class ChesscomClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.chesscom_base_url).rstrip("/")
        self.user_agent = user_agent or settings.chesscom_user_agent
        self._client = client or httpx.Client(
            timeout=timeout if timeout is not None else settings.chesscom_timeout,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
        )

    def _player_url(self, username: str, *parts: str) -> str:
        path = "/".join(("pub", "player", username.strip().lower(), *parts))
        return f"{self.base_url}/{path}"

    def _get_json(self, url: str, endpoint: str) -> dict[str, Any]:
        response = self._client.get(url)
        logger.debug(
            "chesscom.request",
            extra={
                "event": "chesscom.request",
                "endpoint": endpoint,
                "status_code": response.status_code,
            },
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected response payload from {url}.")
        return payload

    def fetch_profile(self, username: str) -> dict[str, Any]:
        return self._get_json(self._player_url(username), CHESSCOM_ENDPOINT_PROFILE)

    def fetch_stats(self, username: str) -> dict[str, Any]:
        return self._get_json(self._player_url(username, "stats"), CHESSCOM_ENDPOINT_STATS)

    def fetch_archives(self, username: str) -> list[str]:
        payload = self._get_json(
            self._player_url(username, "games", "archives"), CHESSCOM_ENDPOINT_ARCHIVES
        )
        archives = payload.get("archives")
        if not isinstance(archives, list):
            raise ValueError("Unexpected archives response payload.")
        return archives

    def fetch_archive_games(self, archive_url: str) -> list[dict[str, Any]]:
        payload = self._get_json(archive_url, CHESSCOM_ENDPOINT_GAMES)
        games = payload.get("games")
        if not isinstance(games, list):
            raise ValueError(f"Unexpected games payload for {archive_url}.")
        return games

    def fetch_recent_games(self, username: str, limit: int) -> list[dict[str, Any]]:
        """Newest games first, walking monthly archives backwards until ``limit``."""
        games: list[dict[str, Any]] = []
        for archive_url in reversed(self.fetch_archives(username)):
            games.extend(self.fetch_archive_games(archive_url))
            if len(games) >= limit:
                break

        games.sort(key=lambda game: game.get("end_time") or 0, reverse=True)
        logger.info(
            "chesscom.recent_games",
            extra={"event": "chesscom.recent_games", "username": username, "games": len(games)},
        )
        return games[:limit]


def get_chesscom_client() -> ChesscomClient:
    return ChesscomClient()
