"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Measurement store (SQLite file path)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "wheel_monitor.db")

    # Live update interval in milliseconds
    UPDATE_INTERVAL_MS: int = int(os.getenv("UPDATE_INTERVAL_MS", "60000"))

    # Simulation
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))
    HISTORY_DAYS: int = int(os.getenv("HISTORY_DAYS", "180"))
    FLEET_TRAINS: int = int(os.getenv("FLEET_TRAINS", "37"))

    # Measurement segmentation
    MEASUREMENT_EPOCH: str = os.getenv("MEASUREMENT_EPOCH", "2024-08-01")
    SEGMENT_GAP_DAYS: float = float(os.getenv("SEGMENT_GAP_DAYS", "60"))

    # Trend chart: keep every Nth daily aggregate
    TREND_STRIDE: int = int(os.getenv("TREND_STRIDE", "3"))

    # Severity: escalate elevated-mean wheels whose peak touched the critical band
    PEAK_ESCALATION: bool = os.getenv("PEAK_ESCALATION", "true").lower() == "true"
    # "max" | "mean": ordering of the critical issues list
    ISSUE_SORT_KEY: str = os.getenv("ISSUE_SORT_KEY", "max")

    # Narrative text generation (OpenAI-compatible chat completions)
    NARRATIVE_API_URL: str = os.getenv("NARRATIVE_API_URL", "https://api.openai.com/v1")
    NARRATIVE_API_KEY: str = os.getenv("NARRATIVE_API_KEY", "")
    NARRATIVE_MODEL: str = os.getenv("NARRATIVE_MODEL", "gpt-4o-mini")
    NARRATIVE_TIMEOUT_S: float = float(os.getenv("NARRATIVE_TIMEOUT_S", "30"))
    NARRATIVE_MAX_RETRIES: int = int(os.getenv("NARRATIVE_MAX_RETRIES", "1"))


settings = Settings()
