"""Deadlock stats dashboard backend."""
