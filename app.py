"""
app.py
──────
Wheel Wear Monitor — Application Entry Point.

Startup sequence:
  1. Configure logging
  2. Initialize SQLite store and seed with simulated fleet history
  3. Create Dash app with DARKLY bootstrap theme
  4. Mount the JSON query routes on the Flask server
  5. Register all callbacks
  6. Run dev server (or expose `server` for gunicorn in production)
"""
import logging

import dash
import dash_bootstrap_components as dbc

from config.settings import settings
from src.api import routes
from src.data.store import initialize_db
from src.layout.main import create_layout

# ── 1. Logging ────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger("wheel_monitor.app")

# ── 2. Seed store on startup ──────────────────────────────────────────────────
logger.info("Initializing store at %s", settings.DATABASE_URL)
initialize_db()
logger.info("Store ready.")

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Wheel Wear Monitor",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()

# ── 4. Query routes ───────────────────────────────────────────────────────────
routes.register(server)

# ── 5. Register callbacks ─────────────────────────────────────────────────────
from src.callbacks import fleet, navigation, train, wheel

navigation.register(app)
fleet.register(app)
train.register(app)
wheel.register(app)

# ── 6. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
