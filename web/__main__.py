"""
Serve the sarif-review API locally.

Usage:
    python -m web [--host 127.0.0.1] [--port 8000] [--log-level info] [--reload]
"""

import argparse

import uvicorn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m web",
        description="Serve the sarif-review viewer API for a single local reviewer",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: %(default)s)")
    parser.add_argument("--port", type=int, default=8000, help="TCP port (default: %(default)s)")
    parser.add_argument(
        "--log-level", default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Server log level (default: %(default)s)",
    )
    parser.add_argument("--reload", action="store_true", help="Restart on source changes")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    print(f"sarif-review API at http://{args.host}:{args.port}/api (health: /health)")

    uvicorn.run(
        "web.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
