#!/usr/bin/env python3
"""
dealerbrain - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload] [--config SETTINGS.json]
"""

import argparse
import os
import uvicorn


def main():
    parser = argparse.ArgumentParser(description="dealerbrain dealer AI server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--config", help="JSON engine settings file")
    args = parser.parse_args()

    if args.config:
        os.environ["DEALERBRAIN_CONFIG"] = args.config

    uvicorn.run(
        "dealerbrain.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
