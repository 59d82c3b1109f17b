"""
Convenience script to run the Flask app.
Run from project root: python backend/run.py
Or from backend: python run.py
"""
import os
import sys
from pathlib import Path

# Patch before anything imports socket/threading; skipped where eventlet is not wanted
if (os.environ.get("SOCKETIO_ASYNC_MODE") or "eventlet") == "eventlet" and not os.environ.get("VERCEL"):
    import eventlet
    eventlet.monkey_patch()

# Add backend to path when run from project root
backend_dir = Path(__file__).resolve().parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from app import create_app
from config.config import config
from extensions import socketio

app = create_app()

if __name__ == "__main__":
    socketio.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "5001")), debug=config.DEBUG)
