from __future__ import annotations

import argparse
import json
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import order portal orders that are missing from the sales sheet."
    )
    parser.add_argument(
        "--env-file",
        default=os.path.join(PROJECT_ROOT, ".env"),
        help="Path to .env file.",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait between order lookups (overrides SYNC_LOOKUP_DELAY_SECONDS).",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    load_env_file(os.path.abspath(args.env_file))

    from salesboard.api.dependencies import get_orders_service
    from salesboard.core.errors import AppError
    from salesboard.core.logging import configure_logging

    configure_logging()
    try:
        service = get_orders_service()
        if args.delay is not None:
            service.lookup_delay_seconds = args.delay
        result = service.sync_new_orders()
    except AppError as exc:
        print(json.dumps({"success": False, "error": {"code": exc.code, "message": exc.message}}, indent=2))
        return 1
    print(json.dumps(result.model_dump(by_alias=True), indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
