from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from chess_coach.core.config import get_settings
from chess_coach.core.logging import configure_logging, get_logger
from chess_coach.db.session import SessionLocal
from chess_coach.schemas.analysis import GameAnalysisOut
from chess_coach.services.chesscom import ChesscomClient
from chess_coach.services.game_analysis import analyze_game
from chess_coach.services.games import fetch_recent_games
from chess_coach.services.pgn import extract_header

logger = get_logger("chess_coach.cli")


def run_analyze(args: argparse.Namespace) -> int:
    pgn = Path(args.pgn_file).read_text(encoding="utf-8")
    analysis = analyze_game(
        pgn,
        args.white or extract_header(pgn, "White") or "",
        args.black or extract_header(pgn, "Black") or "",
        args.result or extract_header(pgn, "Result") or "",
        args.time_control or extract_header(pgn, "TimeControl") or "",
        args.time_class,
        args.game_id or extract_header(pgn, "Link") or Path(args.pgn_file).name,
        args.end_time,
    )
    print(GameAnalysisOut.model_validate(analysis).model_dump_json(indent=2))
    return 0


def run_fetch(args: argparse.Namespace) -> int:
    limit = args.limit or get_settings().recent_games_limit
    with SessionLocal() as session:
        games = fetch_recent_games(session, args.username, ChesscomClient(), limit)
    print(len(games))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chess-coach", description="Chess game analysis tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a PGN file and print JSON")
    analyze.add_argument("pgn_file", help="Path to a PGN file")
    analyze.add_argument("--game-id", default=None, help="Identifier stored in the analysis")
    analyze.add_argument("--white", default=None)
    analyze.add_argument("--black", default=None)
    analyze.add_argument("--result", default=None)
    analyze.add_argument("--time-control", default=None)
    analyze.add_argument("--time-class", default="")
    analyze.add_argument("--end-time", type=int, default=0, help="Epoch seconds")
    analyze.set_defaults(handler=run_analyze)

    fetch = subparsers.add_parser("fetch", help="Fetch recent chess.com games into the database")
    fetch.add_argument("username")
    fetch.add_argument("--limit", type=int, default=None, help="Max games to fetch")
    fetch.set_defaults(handler=run_fetch)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    logger.info("cli.start", extra={"event": "cli.start", "command": args.command})
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
