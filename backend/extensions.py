"""SocketIO instance shared by the app factory and controllers that push ingestion progress."""
import os
from flask_socketio import SocketIO

# SOCKETIO_ASYNC_MODE wins; otherwise threading on Vercel (serverless), eventlet elsewhere for WebSockets
async_mode = os.environ.get("SOCKETIO_ASYNC_MODE") or ("threading" if os.environ.get("VERCEL") else "eventlet")
socketio = SocketIO(cors_allowed_origins="*", async_mode=async_mode)
