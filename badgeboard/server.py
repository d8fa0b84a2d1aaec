#!/usr/bin/env python3
"""
Badgeboard API server: entrypoint for uvicorn badgeboard.server:app.

Run directly with `python -m badgeboard.server`.
"""

from .app import app

if __name__ == "__main__":
    import uvicorn

    from .config import get_config

    config = get_config()
    uvicorn.run(app, host=config.host, port=config.port)
