"""Centralized configuration for the backend.

Loads environment variables, sets defaults, and exposes constants
used across services and routes.
"""

import os

from dotenv import load_dotenv

load_dotenv("env/.env")

ENV = os.getenv("ENV", "local")
PORT = int(os.getenv("PORT", "5000"))

# Shared admin password checked against the x-admin-password header
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# Document store
DATA_DIR = os.getenv("DATA_DIR", "/tmp/portfolio_data")
DB_PATH = os.getenv("DB_PATH", os.path.join(DATA_DIR, "portfolio.duckdb"))
SEED_DIR = os.getenv("SEED_DIR", os.path.join(os.path.dirname(__file__), "..", "data"))

DEFAULT_RESUME_URL = os.getenv(
    "DEFAULT_RESUME_URL",
    "https://drive.google.com/file/d/1GL1jqtVKS8rzlxX2TJfkqcBUpkNj7Kw6/view?usp=sharing",
)

# Requests for a legacy host are redirected to the canonical domain
CANONICAL_URL = os.getenv("CANONICAL_URL", "https://samarthcodes.dev")
LEGACY_HOSTS = tuple(
    h.strip()
    for h in os.getenv("LEGACY_HOSTS", "samarth-portfolio-1cc6.onrender.com").split(",")
    if h.strip()
)
