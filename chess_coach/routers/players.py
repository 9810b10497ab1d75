from typing import Any, Callable

import httpx
from fastapi import APIRouter, Depends, HTTPException

from chess_coach.services.chesscom import ChesscomClient, get_chesscom_client

router = APIRouter(tags=["players"])


def _passthrough(fetch: Callable[[str], dict[str, Any]], username: str) -> dict[str, Any]:
    try:
        return fetch(username)
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code == 404:
            raise HTTPException(status_code=404, detail="Player not found.") from exc
        raise HTTPException(status_code=502, detail=f"chess.com request failed: {exc}") from exc
    except httpx.HTTPError as exc:
        raise HTTPException(status_code=502, detail=f"chess.com request failed: {exc}") from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/players/{username}/profile")
def player_profile(
    username: str, client: ChesscomClient = Depends(get_chesscom_client)
) -> dict[str, Any]:
    return _passthrough(client.fetch_profile, username)


@router.get("/players/{username}/stats")
def player_stats(
    username: str, client: ChesscomClient = Depends(get_chesscom_client)
) -> dict[str, Any]:
    return _passthrough(client.fetch_stats, username)
