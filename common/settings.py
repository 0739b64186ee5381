"""Shared application settings read from environment variables."""

import os

LOG_LEVEL: str = os.environ.get('LOG_LEVEL', 'INFO').upper()

# Seat limits for a single game session.
MAX_PLAYERS: int = int(os.environ.get('MAX_PLAYERS', '4'))
MIN_PLAYERS: int = int(os.environ.get('MIN_PLAYERS', '2'))

# Units of each resource kind a player holds on joining.
STARTING_RESOURCES: int = int(os.environ.get('STARTING_RESOURCES', '0'))

VICTORY_POINTS_TO_WIN: int = int(os.environ.get('VICTORY_POINTS_TO_WIN', '10'))

# Oldest entries are dropped once a session's action log reaches this size.
ACTION_LOG_LIMIT: int = int(os.environ.get('ACTION_LOG_LIMIT', '50'))
