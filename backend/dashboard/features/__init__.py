"""Feature packages: assets, players, meta, leaderboard, synthetic data and stats orchestration."""
