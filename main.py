"""
Entrypoint for the AI Media Studio engine.
Runs the FastAPI application from ``core.app_state`` with uvicorn.
"""

from __future__ import annotations

import argparse
import os

from core.app_state import config, logger

APP_IMPORT_STRING = "core.app_state:app"


def main(argv=None):
    import uvicorn

    parser = argparse.ArgumentParser(description="AI Media Studio engine")
    parser.add_argument("--host", default=config.APP_HOST, help="Bind address")
    parser.add_argument("--port", type=int, default=config.APP_PORT, help="Bind port")
    parser.add_argument("--reload", action="store_true", default=config.APP_RELOAD, help="Reload on code changes")
    parser.add_argument(
        "--extra-verbose",
        action="store_true",
        help="Log full prompts and raw model responses for every request",
    )
    args = parser.parse_args(argv)

    if args.extra_verbose:
        # Propagates to reload workers through the environment
        os.environ["EXTRA_VERBOSE"] = "true"
        config.EXTRA_VERBOSE = True

    logger.info("Starting AI Media Studio on %s:%d", args.host, args.port)
    uvicorn.run(
        APP_IMPORT_STRING,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
