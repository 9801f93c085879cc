"""Deterministic synthetic data used as demo mode and live fallback."""

from .generator import build_mock_leaderboard, build_mock_meta_snapshot, build_mock_player_profile
from .rng import Mulberry32, fnv1a_32

__all__ = [
    "build_mock_player_profile",
    "build_mock_meta_snapshot",
    "build_mock_leaderboard",
    "Mulberry32",
    "fnv1a_32",
]
