# Bump ANALYSIS_VERSION whenever the heuristics change so cached analyses are recomputed.
ANALYSIS_VERSION = "heuristic-v1"
INGEST_VERSION = "v0.1"
COACH_PROMPT_VERSION = "coach-v1"

CHESSCOM_ENDPOINT_PROFILE = "profile"
CHESSCOM_ENDPOINT_STATS = "stats"
CHESSCOM_ENDPOINT_ARCHIVES = "archives"
CHESSCOM_ENDPOINT_GAMES = "games"
