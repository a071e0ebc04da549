"""Storefront API server runner.

Usage:
    storefront                       # Bind to $HOST:$PORT (default 0.0.0.0:4000)
    storefront --port 8080 --reload  # Override the port, reload on code changes
"""

import argparse

import uvicorn

from storefront.config import get_host, get_port


def main():
    parser = argparse.ArgumentParser(description="Storefront API server")
    parser.add_argument("--host", default=get_host(), help="Bind address (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=get_port(), help="Port (default: $PORT or 4000)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    print(f"Server running on http://localhost:{args.port}")
    # log_config=None keeps the structlog setup from storefront.utils.logging
    uvicorn.run("storefront.app:app", host=args.host, port=args.port, reload=args.reload, log_config=None)


if __name__ == "__main__":
    main()
