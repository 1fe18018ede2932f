"""
RUN SCRIPT - Start the portfolio assistant server
=================================================

PURPOSE:
  Single entry point to start the backend. The server then handles all chat
  and demo requests coming from the portfolio frontend.

WHAT IT DOES:
  - Imports the FastAPI app from app.main.
  - Runs it with uvicorn on HOST:PORT from config (0.0.0.0:8000 by default).
  - reload=True means any change to Python files will restart the server (handy for development).

USAGE:
  python run.py

  Then open http://localhost:8000 in the browser, or use the API from the frontend.
  API docs: http://localhost:8000/docs

NOTE:
  Set SIMULATE_LATENCY=false in .env to answer instantly (no artificial delays).
"""

import uvicorn

from config import HOST, PORT

# ------------------------------------------------------------------------------
# ENTRY POINT
# ------------------------------------------------------------------------------
# Only run uvicorn when this file is executed directly (python run.py),
# not when it is imported by another module.
if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",   # String path to the FastAPI app instance (module:variable).
        host=HOST,        # Listen on all network interfaces so other devices can connect.
        port=PORT,        # HTTP port; change PORT in .env if 8000 is already in use.
        reload=True       # Auto-restart when .py files change (useful during development).
    )
