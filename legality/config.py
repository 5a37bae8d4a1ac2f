#!/usr/bin/env python3

"""
Encounter Legality Configuration
Tunables and paths. Each value can be overridden from the environment.

NOTE: All paths are absolute and should be constructed using os.path.join for cross-platform compatibility.
"""

import os


def _env_int(name, default, minimum=1):
    """Read a positive integer override from the environment."""
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        print(f"[Config] Ignoring {name}={raw!r}: not an integer")
        return default
    if value < minimum:
        print(f"[Config] Ignoring {name}={value}: must be >= {minimum}")
        return default
    return value


# ===== Directory Paths =====

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

if os.environ.get("LEGALITY_LOG_DIR"):
    LOG_DIR = os.environ["LEGALITY_LOG_DIR"]
else:
    LOG_DIR = os.getcwd()

LOG_FILE_NAME = "legality.log"


# ===== Correlation =====

# Upper bound on PID/IV draws for a single synthesis request. Forced-shiny
# requests on LCRNG methods need ~200k draws on average with a nature pinned.
MAX_CORRELATION_ATTEMPTS = _env_int("LEGALITY_MAX_ATTEMPTS", 1_000_000)

# Forced-shiny requests on seeded algorithms walk 65536 RNG states per sweep
# and find ~8 shiny frames in each.
MAX_SHINY_SWEEPS = _env_int("LEGALITY_MAX_SHINY_SWEEPS", 256)


# ===== Bulk scans =====

DEFAULT_WORKERS = _env_int("LEGALITY_WORKERS", min(8, (os.cpu_count() or 1)))


# ===== Trainer defaults =====

# Used when a caller synthesizes without a trainer of its own
DEFAULT_TRAINER_NAME = "TRAINER"
DEFAULT_TRAINER_ID = 31337
DEFAULT_SECRET_ID = 1337
