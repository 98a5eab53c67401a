"""Shared infrastructure utilities for UniTrack services."""
