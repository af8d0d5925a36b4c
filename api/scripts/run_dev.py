"""
Script para ejecutar el servidor en modo desarrollo (auto-reload).

Uso:
  python scripts/run_dev.py
  python scripts/run_dev.py --port 5016
"""
import argparse
import sys
from pathlib import Path

import uvicorn

_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

from app.core.config import settings


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    args = parser.parse_args()

    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=True,
        reload_dirs=[str(_API_ROOT / "app")],
        app_dir=str(_API_ROOT),
        log_level=settings.LOG_LEVEL.lower()
    )
