"""Deadlock API constants."""

# SteamID64 of account 0 in the individual-account universe
STEAM_ID64_OFFSET = 76561197960265728

# Largest integer the upstream (a JavaScript client) can represent exactly
MAX_SAFE_INTEGER = 2**53 - 1

USER_AGENT = "DeadlockStatsDashboard/1.0"
API_KEY_HEADER = "X-API-KEY"

# Error bodies are truncated to this many characters in exception messages
ERROR_BODY_PREVIEW = 300

# Roster size of a match, used to estimate match counts from hero picks
PLAYERS_PER_MATCH = 12
