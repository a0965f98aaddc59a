"""
WSGI entry point (Railway/Render/cPanel): gunicorn -c gunicorn_config.py wsgi:app
"""
import logging
import os

from app import create_app
from config import Config, ProductionConfig, _is_production

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app(ProductionConfig if _is_production() else Config)
application = app

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "false").lower() in ("true", "1"))
