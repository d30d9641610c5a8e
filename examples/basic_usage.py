"""
Walk through the read-only endpoints with a real access token.

Set ``INSTAGRAM_CLIENT_ID``, ``INSTAGRAM_CLIENT_SECRET`` and
``INSTAGRAM_REDIRECT_URI`` (a ``.env`` file works too). Without
``INSTAGRAM_ACCESS_TOKEN`` the script prints the login URL; pass the ``code``
the redirect receives as the first argument to exchange it.
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any

from instagram_client import APIError, InstagramClient, InstagramError, TransportError
from instagram_client.log import get_logger


def exercise_user(client: InstagramClient) -> dict[str, Any]:
    summary: dict[str, Any] = {}
    me = client.get_user()
    summary["me"] = me.get("data.username")
    summary["recent_media"] = [item["id"] for item in client.get_user_media(limit=3).get("data", [])]
    summary["follows"] = len(client.get_follows().get("data", []))
    return summary


def exercise_tags(client: InstagramClient, tag: str) -> dict[str, Any]:
    summary: dict[str, Any] = {}
    summary["tag"] = client.get_tag(tag).get("data")
    summary["search"] = [item["name"] for item in client.search_tags(tag).get("data", [])]
    summary["tagged_media"] = len(client.get_tagged_media(tag, limit=5).get("data", []))
    return summary


def run(argv: list[str]) -> dict[str, Any] | None:
    report: dict[str, Any] = {}

    with InstagramClient.from_env() as client:
        token = os.getenv("INSTAGRAM_ACCESS_TOKEN")
        if not token and len(argv) > 1:
            token = client.get_oauth_token(argv[1], token_only=True)
            report["exchanged_token"] = True
        if not token:
            print(client.get_login_url(["basic", "public_content", "follower_list"]))
            return None

        client.set_access_token(token)
        report["user"] = exercise_user(client)
        report["tags"] = exercise_tags(client, "#nofilter")

    return report


def main() -> None:
    get_logger(os.getenv("INSTAGRAM_LOG_FORMAT", "text"))
    try:
        report = run(sys.argv)
    except TransportError as exc:
        print(f"[Transport error] {exc}")
        raise
    except APIError as exc:
        print(f"[API error] kind={exc.kind.value} code={exc.code} message={exc.message}")
        if exc.payload:
            print(f"payload: {exc.payload}")
        raise
    except InstagramError as exc:
        print(f"[SDK error] {exc}")
        raise
    else:
        if report is not None:
            print(json.dumps(report, indent=2, default=str))


if __name__ == "__main__":
    main()
