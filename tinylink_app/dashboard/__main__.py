#!/usr/bin/env python3
"""
Terminal dashboard for the link service.

Usage:
    python -m tinylink_app.dashboard list [--search TEXT]
    python -m tinylink_app.dashboard watch [--search TEXT]
    python -m tinylink_app.dashboard create URL [--code CODE]
    python -m tinylink_app.dashboard delete CODE [--yes]
"""

import argparse
import logging
import sys
import time

import httpx

from tinylink_app.config import settings
from tinylink_app.dashboard.app import Dashboard
from tinylink_app.dashboard.client import DashboardApiError, LinkApiClient


def ask_confirmation(code: str) -> bool:
    answer = input(f"Delete {code}? [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tinylink-dashboard", description="TinyLink dashboard")
    parser.add_argument("--api-url", default=settings.dashboard_api_url, help="Service base URL")
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="Print all links")
    list_cmd.add_argument("--search", default="", help="Filter by code or URL")

    watch_cmd = sub.add_parser("watch", help="Print links and follow click counts")
    watch_cmd.add_argument("--search", default="", help="Filter by code or URL")
    watch_cmd.add_argument("--interval", type=float, default=settings.dashboard_poll_interval)

    create_cmd = sub.add_parser("create", help="Create a short link")
    create_cmd.add_argument("url")
    create_cmd.add_argument("--code", default=None, help="Custom code, [A-Za-z0-9]{6,8}")

    delete_cmd = sub.add_parser("delete", help="Delete a short link")
    delete_cmd.add_argument("code")
    delete_cmd.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    return parser


def run(args) -> int:
    api = LinkApiClient.from_url(args.api_url)
    confirm = (lambda code: True) if getattr(args, "yes", False) else ask_confirmation
    interval = getattr(args, "interval", settings.dashboard_poll_interval)
    dashboard = Dashboard(api, confirm=confirm, poll_interval=interval)

    try:
        if args.command == "list":
            dashboard.search(args.search)
            print(dashboard.table.format())
        elif args.command == "create":
            link = dashboard.create(args.url, args.code)
            print(f"Created: {link['short_url']}")
        elif args.command == "delete":
            if dashboard.delete(args.code):
                print(f"Deleted {args.code}")
            else:
                print("Cancelled")
        elif args.command == "watch":
            dashboard.on_change = lambda changed: print("\n" + dashboard.table.format())
            dashboard.search(args.search)
            print(dashboard.table.format())
            dashboard.start_live_updates()
            try:
                while True:
                    time.sleep(1)
            except KeyboardInterrupt:
                pass
            finally:
                dashboard.stop_live_updates()
    except DashboardApiError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"Network error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        api.close()
    return 0


def main(argv=None) -> int:
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(message)s")
    return run(build_parser().parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
