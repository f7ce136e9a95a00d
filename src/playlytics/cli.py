"""Command-line interface for recording and comparing players."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from playlytics.analysis import CompareRequestHandler, stat_deltas
from playlytics.config import get_sport
from playlytics.config_loader import ImportProfile, Settings
from playlytics.errors import ComparisonError
from playlytics.ingest import import_players, load_player_csv
from playlytics.models import STAT_FIELDS, PlayerDraft
from playlytics.persistence import PlayerStore


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Record player stats and compare two players")
    parser.add_argument("--config", type=Path, default=None, help="Settings JSON profile")
    parser.add_argument("--db", type=Path, default=None, help="SQLite database path (overrides settings)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Record a new player")
    add.add_argument("name", help="Player display name")
    add.add_argument("sport", help="Sport category (e.g., Basketball)")
    for stat in STAT_FIELDS:
        add.add_argument(f"--{stat}", type=int, default=0, help=f"Initial {stat} count")

    listing = subparsers.add_parser("list", help="List recorded players, newest first")
    listing.add_argument("--sport", default=None, help="Only show players in this sport")

    importer = subparsers.add_parser("import", help="Import players from a CSV file")
    importer.add_argument("csv_path", type=Path, help="Path to players CSV")
    importer.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for CSV columns (e.g., name=First Name|Last Name)",
    )
    importer.add_argument("--sport", default=None, help="Sport used when a row has none")
    importer.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    importer.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    importer.add_argument("--report", type=Path, default=None, help="Optional path to write import summary JSON")

    compare = subparsers.add_parser("compare", help="Compare two recorded players")
    compare.add_argument("player1_id")
    compare.add_argument("player2_id")
    compare.add_argument("--json", action="store_true", help="Print the raw comparison payload")

    serve = subparsers.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _sport_label(raw: str | None) -> str | None:
    """Use the configured label for known sports; keep anything else as typed."""

    if not raw:
        return raw
    try:
        return get_sport(raw).label
    except KeyError:
        return raw


def _resolve_settings(args: argparse.Namespace) -> Settings:
    base = Settings.load(args.config) if args.config else None
    settings = Settings.from_env(base)
    if args.db:
        settings.db_path = args.db
    return settings


def _format_comparison(payload: dict, deltas: dict[str, int]) -> str:
    player1 = payload["comparison"]["player1"]
    player2 = payload["comparison"]["player2"]
    width = max(len(player1["name"]), len(player2["name"]), 8)
    lines = [f"{'stat':<10} {player1['name']:>{width}} {player2['name']:>{width}} {'delta':>7}"]
    for stat in STAT_FIELDS:
        lines.append(
            f"{stat:<10} {player1[stat]:>{width}} {player2[stat]:>{width}} {deltas[stat]:>+7d}"
        )
    lines.append("")
    for key in ("player1", "player2"):
        trend = payload["trends"][key]
        name = payload["comparison"][key]["name"]
        lines.append(f"{name}: {trend['direction']} (slope {trend['slope']:.2f})")
    if payload["insights"]:
        lines.append("")
        lines.extend(f"- {insight}" for insight in payload["insights"])
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = _resolve_settings(args)
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    if args.command == "serve":
        import uvicorn

        from playlytics.api import create_app

        uvicorn.run(create_app(settings=settings), host=args.host, port=args.port)
        return

    store = PlayerStore(settings.db_path)

    if args.command == "add":
        draft = PlayerDraft(
            name=args.name,
            sport=_sport_label(args.sport),
            **{stat: getattr(args, stat) for stat in STAT_FIELDS},
        )
        player = store.create_player(draft)
        print(f"Added {player.name} ({player.sport}) as {player.id}")
        return

    if args.command == "list":
        players = store.list_players(sport=_sport_label(args.sport))
        if not players:
            print("No players recorded")
            return
        for player in players:
            stats = " ".join(f"{stat}={getattr(player, stat)}" for stat in STAT_FIELDS)
            print(f"{player.id}  {player.name} [{player.sport}] {stats}")
        return

    if args.command == "import":
        mapping = _parse_mapping(args.column)
        default_sport = _sport_label(args.sport)
        if args.load_profile:
            profile = ImportProfile.load(args.load_profile)
            mapping = profile.column_mapping | mapping
            default_sport = default_sport or profile.default_sport
        drafts, report = load_player_csv(args.csv_path, mapping=mapping, default_sport=default_sport)
        import_players(store, drafts, report)
        if args.save_profile:
            ImportProfile(mapping, default_sport).save(args.save_profile)
            print(f"Saved column profile to {args.save_profile}")
        print(f"Imported {report.imported}/{report.total_rows} players")
        if report.skipped_rows:
            preview = "; ".join(report.skipped_rows[:5])
            more = len(report.skipped_rows) - 5
            suffix = f"; +{more} more" if more > 0 else ""
            print(f"Skipped rows: {preview}{suffix}")
        if args.report:
            args.report.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
            print(f"Wrote import report to {args.report}")
        return

    if args.command == "compare":
        handler = CompareRequestHandler(store, thresholds=settings.thresholds)
        try:
            result = handler.handle({"player1Id": args.player1_id, "player2Id": args.player2_id})
        except ComparisonError as exc:
            print(json.dumps({"error": exc.render()}), file=sys.stderr)
            raise SystemExit(1) from exc
        payload = result.to_payload()
        if args.json:
            print(json.dumps(payload, indent=2))
            return
        print(_format_comparison(payload, stat_deltas(result.player1, result.player2)))


if __name__ == "__main__":
    main()
