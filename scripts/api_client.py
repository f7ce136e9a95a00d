"""Lightweight REST client for the playlytics API."""

from __future__ import annotations

import argparse
import json

import httpx

from playlytics.api.schemas import CompareRequest


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the playlytics REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--list-players", action="store_true", help="List recorded players and exit")
    parser.add_argument("--sport", default=None, help="Sport filter for --list-players")
    parser.add_argument("--get-player", metavar="PLAYER_ID", help="Fetch a specific player and exit")
    parser.add_argument(
        "--compare",
        nargs=2,
        metavar=("PLAYER1_ID", "PLAYER2_ID"),
        help="Compare two players",
    )
    args = parser.parse_args()

    if not (args.list_players or args.get_player or args.compare):
        raise SystemExit("one of --list-players, --get-player or --compare is required")

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_players:
            params = {"sport": args.sport} if args.sport else None
            resp = client.get("/players", params=params)
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.get_player:
            resp = client.get(f"/players/{args.get_player}")
            if resp.status_code == 404:
                raise SystemExit(f"player {args.get_player} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.compare:
            body = CompareRequest(player1Id=args.compare[0], player2Id=args.compare[1])
            resp = client.post("/compare-players", json=body.model_dump())
            payload = resp.json()
            if resp.status_code != 200:
                raise SystemExit(f"comparison failed: {payload.get('error', resp.text)}")
            print(json.dumps(payload["comparison"], indent=2))
            print(json.dumps(payload["trends"], indent=2))
            for insight in payload["insights"]:
                print(f"- {insight}")


if __name__ == "__main__":
    main()
