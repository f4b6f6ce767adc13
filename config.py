"""
config.py — Application Settings
================================
Defaults for the Flask host.  Loaded with app.config.from_object(Config)
and then overridden from the environment: any VISUALIZER_<NAME> variable
replaces <NAME> (values are parsed as JSON when possible, so
VISUALIZER_DEFAULT_SPEED_MS=300 arrives as an int).
"""

import os
import secrets


class Config:
    SECRET_KEY = os.environ.get("VISUALIZER_SECRET_KEY") or secrets.token_hex(32)
    LOG_LEVEL  = "INFO"

    # playback (milliseconds per step)
    DEFAULT_SPEED_MS = 500
    MIN_SPEED_MS     = 100
    MAX_SPEED_MS     = 1000

    # random array generation for the sorting tracer
    ARRAY_MIN_SIZE     = 4
    ARRAY_MAX_SIZE     = 20
    ARRAY_DEFAULT_SIZE = 12
    ARRAY_MAX_VALUE    = 50

    # server-side sessions kept in memory (least recently used dropped first)
    MAX_SESSIONS = 1000


class TestingConfig(Config):
    TESTING   = True
    LOG_LEVEL = "DEBUG"
