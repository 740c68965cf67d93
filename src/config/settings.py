# src/config/settings.py

"""Central configuration for the campus_market catalog browser."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the campus_market catalog browser."""

    # --- Catalog data source ---
    SIMULATED_LATENCY: float = float(
        os.getenv("CAMPUS_MARKET_LATENCY", "0.8")
    )                                   # Seconds of fake fetch delay

    # --- Query defaults ---
    PAGE_SIZE: int = int(os.getenv("CAMPUS_MARKET_PAGE_SIZE", "12"))
    DEFAULT_PRICE_RANGE: tuple[float, float] = (0.0, 1000.0)
    NEARBY_RADIUS_KM: float = 2.0       # Radius for "nearby" searches
    PAGE_WINDOW_THRESHOLD: int = 5      # Show every page link up to this

    # --- Result cache ---
    QUERY_CACHE_TTL: float = 300.0      # Seconds a cached page stays valid

    # --- Search suggestions ---
    SUGGESTION_LIMIT: int = 3
    POPULAR_SEARCHES: list[str] = [
        "macbook pro",
        "textbooks",
        "iphone charger",
        "desk lamp",
        "headphones",
        "calculator",
        "monitor",
    ]
    RECENT_SEARCHES: list[str] = [
        "laptop",
        "iphone",
        "desk chair",
        "textbook",
    ]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    CATALOG_PATH: Path = Path(
        os.getenv(
            "CAMPUS_MARKET_CATALOG",
            str(BASE_DIR / "src" / "data" / "seed_catalog.json"),
        )
    )
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"
