"""Configuration loading from environment variables and defaults."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if it exists
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


def _optional_int(name: str):
    value = os.getenv(name, "").strip()
    return int(value) if value else None


# Monte Carlo
EQUITY_TRIALS = int(os.getenv("POKER_ODDS_EQUITY_TRIALS", "10000"))
HAND_ODDS_TRIALS = int(os.getenv("POKER_ODDS_HAND_ODDS_TRIALS", "5000"))
DEFAULT_OPPONENTS = int(os.getenv("POKER_ODDS_DEFAULT_OPPONENTS", "1"))
RANDOM_SEED = _optional_int("POKER_ODDS_SEED")
# Fraction of skipped trials above which an estimate is rejected
MAX_SKIP_RATE = float(os.getenv("POKER_ODDS_MAX_SKIP_RATE", "0.01"))

# Clean/dirty out sampling. Bigger samples are more accurate and slower;
# enumerating every opponent holding would be exact.
DIRTY_OUT_SAMPLE_SIZE = int(os.getenv("POKER_ODDS_DIRTY_OUT_SAMPLE", "3"))
DIRTY_OPPONENT_SAMPLE_SIZE = int(os.getenv("POKER_ODDS_DIRTY_OPPONENT_SAMPLE", "20"))
DIRTY_OPPONENT_THRESHOLD = float(os.getenv("POKER_ODDS_DIRTY_THRESHOLD", "0.3"))

# What-beats-me examples kept per hand group
EXAMPLE_HOLDINGS_PER_GROUP = 3

# Recommendation list length
TOP_ACTIONS = 3

# AI provider (OpenAI compatible)
AI_API_KEY = os.getenv("POKER_ODDS_AI_API_KEY", "")
AI_API_ENDPOINT = os.getenv("POKER_ODDS_AI_ENDPOINT", "https://api.x.ai/v1")
TEXT_MODEL = os.getenv("POKER_ODDS_TEXT_MODEL", "grok-3-mini")
VISION_MODEL = os.getenv("POKER_ODDS_VISION_MODEL", "grok-2-vision-latest")
MAX_TOKENS = int(os.getenv("POKER_ODDS_AI_MAX_TOKENS", "300"))
AI_TIMEOUT = float(os.getenv("POKER_ODDS_AI_TIMEOUT", "30"))
AI_MAX_RETRIES = int(os.getenv("POKER_ODDS_AI_MAX_RETRIES", "2"))

# Logging
LOG_LEVEL = os.getenv("POKER_ODDS_LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("POKER_ODDS_LOG_FILE", "")
