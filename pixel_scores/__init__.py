"""Minimal leaderboard API with bounded top-N retention."""
