"""
MultiVersus backend endpoint definitions.

All paths are relative to the Hydra base URL.
Note: The backend is undocumented and unofficial - paths may change.
"""

# Base URL
HYDRA_BASE_URL = "https://dokken-api.wbagora.com"

# Sent as x-hydra-user-agent when the caller does not supply one
DEFAULT_USER_AGENT = "Hydra-Cpp/1.132.0"

# Auth provider key used in the token exchange body
DEFAULT_AUTH_PROVIDER = "steam"

# Leaderboard types accepted by the backend
LEADERBOARD_TYPES = ("1v1", "2v2")

# =============================================================================
# Unauthenticated Endpoints
# =============================================================================

# Access - Exchange a platform ticket for an access token
# POST {"auth": {"steam": "<ticket hex>", "fail_on_missing": true}}
ACCESS = "/access"

# =============================================================================
# Authenticated Endpoints (x-hydra-access-token required)
# =============================================================================

# Batch - Several sub-requests in one PUT
BATCH = "/batch"

# Search by username - Cursor paginated
# Query: username, limit, cursor, account_fields (repeated)
SEARCH_BY_USERNAME = "/profiles/search_queries/get-by-username/run"

# Profile - Player profile, ratings and cosmetics
PROFILE = "/profiles/{user_id}"

# Account - Linked platform identities
ACCOUNT = "/accounts/{user_id}"

# Match - A single match
MATCH = "/matches/{match_id}"

# Matches - A player's match history, paged with ?page=N
MATCHES = "/matches/all/{user_id}"

# Leaderboard - Global leaderboard for a type
LEADERBOARD = "/leaderboards/{leaderboard}/show"

# Leaderboard rank - A player's score and rank on a leaderboard
# Character boards are named "<character id>_<type>"
LEADERBOARD_RANK = "/leaderboards/{leaderboard}/score-and-rank/{user_id}"

# =============================================================================
# Endpoint Helper Functions
# =============================================================================


def get_profile_path(user_id: str) -> str:
    """Get path for a player profile."""
    return PROFILE.format(user_id=user_id)


def get_account_path(user_id: str) -> str:
    """Get path for a player account."""
    return ACCOUNT.format(user_id=user_id)


def get_match_path(match_id: str) -> str:
    """Get path for a single match."""
    return MATCH.format(match_id=match_id)


def get_matches_path(user_id: str) -> str:
    """Get path for a player's match history."""
    return MATCHES.format(user_id=user_id)


def get_leaderboard_path(leaderboard_type: str) -> str:
    """Get path for a global leaderboard."""
    return LEADERBOARD.format(leaderboard=leaderboard_type)


def get_leaderboard_rank_path(
    user_id: str,
    leaderboard_type: str,
    character_id: str | None = None,
) -> str:
    """
    Get path for a player's leaderboard rank.

    Args:
        user_id: Player account ID
        leaderboard_type: "1v1" or "2v2"
        character_id: Scope the board to one character
    """
    leaderboard = leaderboard_type
    if character_id:
        leaderboard = f"{character_id}_{leaderboard_type}"

    return LEADERBOARD_RANK.format(leaderboard=leaderboard, user_id=user_id)
