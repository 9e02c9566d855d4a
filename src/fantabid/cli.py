"""Command-line interface for running an auction draft from a state file."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from fantabid.config import (
    DEFAULT_BUDGET,
    DEFAULT_CAPS,
    DEFAULT_TARGETS,
    caps_from_amounts,
    caps_from_percentages,
)
from fantabid.config_loader import ConfigProfile
from fantabid.draft import (
    DraftState,
    balance_band,
    balance_score,
    budget_breakdown,
    from_snapshot,
    get_suggestions,
    initialize,
    mark_unavailable,
    opponent_summary,
    pick,
    remaining_needed,
    to_snapshot,
    top_by_role,
)
from fantabid.errors import FantabidError
from fantabid.ingest import load_roster_csv
from fantabid.models import ROLES, normalize_role
from fantabid.pool import PlayerFilter, export_players_to_csv, filter_players


logger = logging.getLogger(__name__)

DEFAULT_STATE_PATH = Path("fanta_state.json")


def _parse_role_values(entries: list[str]) -> dict[str, float]:
    values: dict[str, float] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid entry '{entry}', expected role=value")
        key, value = entry.split("=", 1)
        values[normalize_role(key)] = float(value)
    return values


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Auction draft assistant")
    parser.add_argument(
        "--state",
        type=Path,
        default=DEFAULT_STATE_PATH,
        help="Path to the draft state JSON file",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Load a roster CSV and start a new draft")
    init.add_argument("roster", type=Path, help="Path to roster CSV")
    init.add_argument("--config", type=Path, default=None, help="Load configuration profile JSON")
    init.add_argument("--save-config", type=Path, default=None, help="Save configuration profile JSON")
    init.add_argument("--budget", type=float, default=None, help="Total budget in credits")
    init.add_argument("--top-k", type=int, default=None, help="Number of suggestions per list")
    init.add_argument("--user-score-weight", type=float, default=None, help="Weight applied to the S column")
    init.add_argument(
        "--target",
        action="append",
        default=[],
        help="Players to buy per role (e.g., p=3)",
    )
    cap_group = init.add_mutually_exclusive_group()
    cap_group.add_argument(
        "--cap",
        action="append",
        default=[],
        help="Role cap as a fraction of budget (e.g., a=0.3)",
    )
    cap_group.add_argument(
        "--cap-percent",
        action="append",
        default=[],
        help="Role cap as a percentage; all four must sum to 100 (e.g., a=30)",
    )
    cap_group.add_argument(
        "--cap-amount",
        action="append",
        default=[],
        help="Role cap in credits; sum must not exceed budget (e.g., a=60)",
    )
    init.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., base_value=FVM)",
    )

    pick_cmd = sub.add_parser("pick", help="Record a player you bought")
    pick_cmd.add_argument("name")
    pick_cmd.add_argument("price", type=float)

    gone = sub.add_parser("gone", help="Mark a player as taken by someone else")
    gone.add_argument("name")
    gone.add_argument("price", type=float, nargs="?", default=None)
    gone.add_argument("--owner", default=None, help="Manager who bought the player")

    suggest = sub.add_parser("suggest", help="Show standard and optimized suggestions")
    suggest.add_argument("--csv", action="store_true", help="Print optimized lists as CSV")

    sub.add_parser("budget", help="Show per-role budget breakdown")

    top = sub.add_parser("top", help="Show top players for a role")
    top.add_argument("role")
    top.add_argument("-k", type=int, default=None)

    search = sub.add_parser("search", help="Search the roster")
    search.add_argument("--name", default=None)
    search.add_argument("--team", default=None)
    search.add_argument("--role", default=None)
    search.add_argument("--available-only", action="store_true")
    search.add_argument("--limit", type=int, default=None)

    sub.add_parser("status", help="Show balance, needs and opponents")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


def _build_settings(args: argparse.Namespace) -> tuple[dict, dict[str, str]]:
    settings: dict = {}
    mapping: dict[str, str] = {}
    if args.config:
        profile = ConfigProfile.load(args.config)
        settings.update(profile.settings)
        mapping.update(profile.roster_mapping)

    for entry in args.column:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()

    if args.budget is not None:
        settings["budget"] = args.budget
    if args.top_k is not None:
        settings["top_k"] = args.top_k
    if args.user_score_weight is not None:
        settings["user_score_weight"] = args.user_score_weight
    if args.target:
        targets = dict(settings.get("targets") or DEFAULT_TARGETS)
        targets.update({role: int(value) for role, value in _parse_role_values(args.target).items()})
        settings["targets"] = targets

    if args.cap:
        caps = dict(settings.get("caps") or DEFAULT_CAPS)
        caps.update(_parse_role_values(args.cap))
        settings["caps"] = caps
    elif args.cap_percent:
        settings["caps"] = caps_from_percentages(_parse_role_values(args.cap_percent))
    elif args.cap_amount:
        budget = float(settings.get("budget", DEFAULT_BUDGET))
        settings["caps"] = caps_from_amounts(_parse_role_values(args.cap_amount), budget=budget)
    return settings, mapping


def _load_state(path: Path) -> DraftState:
    if not path.exists():
        raise SystemExit(f"No draft state at {path}; run 'init' first")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"{path} is not valid JSON: {exc}") from exc
    return from_snapshot(data)


def _save_state(path: Path, state: DraftState) -> None:
    try:
        path.write_text(json.dumps(to_snapshot(state), indent=2), encoding="utf-8")
    except OSError:
        logger.exception("Could not write draft state to %s", path)


def _format_player(index: int, player) -> str:
    score = "-" if player.score is None else f"{player.score:.2f}"
    return f"  {index}. {player.name} ({player.team}, {player.ageband or '-'}) value={player.base_value:g} score={score}"


def _print_suggestions(state: DraftState, as_csv: bool) -> None:
    needed = remaining_needed(state)
    for role, result in get_suggestions(state).items():
        if as_csv:
            print(f"# {role}")
            print(export_players_to_csv(result.optimized), end="")
            continue
        print(f"{role.upper()}")
        if not needed[role]:
            print("  (no players needed)")
            continue
        if not result.standard:
            print("  (no players available)")
            continue
        print(" standard:")
        for index, player in enumerate(result.standard, start=1):
            print(_format_player(index, player))
        print(" optimized:")
        if not result.optimized:
            print("  (nothing within budget/cap)")
        for index, player in enumerate(result.optimized, start=1):
            print(_format_player(index, player))


def _print_budget(state: DraftState) -> None:
    print(f"Budget remaining: {state.budget_remaining:g} / {state.config.budget:g}")
    for role, item in budget_breakdown(state).items():
        marker = " *" if item.adjusted else ""
        print(
            f"  {role:<11} cap={item.cap:.1f} spent={item.spent:g} "
            f"remaining={item.remaining:.1f}{marker}"
        )


def _print_status(state: DraftState) -> None:
    score = balance_score(state)
    print(f"Balance: {score}% ({balance_band(score)})")
    needed = remaining_needed(state)
    print("Still needed: " + ", ".join(f"{role}={needed[role]}" for role in ROLES))
    for summary in opponent_summary(state):
        counts = ", ".join(f"{role}={summary.counts[role]}" for role in ROLES)
        print(f"  {summary.owner}: budget={summary.budget_remaining:g} spent={summary.spent:g} [{counts}]")
        for warning in summary.warnings:
            print(f"    warning: {warning}")


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        _run(args)
    except (FantabidError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc


def _run(args: argparse.Namespace) -> None:
    if args.command == "serve":
        import uvicorn

        from fantabid.api import create_app

        uvicorn.run(create_app(), host=args.host, port=args.port)
        return

    if args.command == "init":
        settings, mapping = _build_settings(args)
        players, report = load_roster_csv(args.roster, mapping=mapping or None)
        state = initialize(players, settings)
        if args.save_config:
            ConfigProfile(settings=state.config.model_dump(mode="json"), roster_mapping=mapping).save(
                args.save_config
            )
            print(f"Saved configuration profile to {args.save_config}")
        print(f"Loaded {report.loaded_players}/{report.total_rows} players")
        if report.skipped_rows:
            preview = ", ".join(report.skipped_rows[:5])
            more = len(report.skipped_rows) - 5
            suffix = f", +{more} more" if more > 0 else ""
            print(f"Skipped rows: {preview}{suffix}")
        _save_state(args.state, state)
        return

    state = _load_state(args.state)

    if args.command == "pick":
        state = pick(state, args.name, args.price)
        _save_state(args.state, state)
        print(f"Budget remaining: {state.budget_remaining:g}")
    elif args.command == "gone":
        state = mark_unavailable(state, args.name, args.price, args.owner)
        _save_state(args.state, state)
    elif args.command == "suggest":
        _print_suggestions(state, args.csv)
    elif args.command == "budget":
        _print_budget(state)
    elif args.command == "top":
        k = args.k or state.config.top_k
        for index, player in enumerate(top_by_role(state, args.role, k), start=1):
            print(_format_player(index, player))
    elif args.command == "search":
        criteria = PlayerFilter(
            name=args.name,
            team=args.team,
            role=normalize_role(args.role) if args.role else None,
            available_only=args.available_only,
            limit=args.limit,
        )
        if criteria.is_empty():
            raise SystemExit("Provide at least one search criterion")
        for index, player in enumerate(filter_players(state, criteria), start=1):
            print(_format_player(index, player))
    elif args.command == "status":
        _print_status(state)


if __name__ == "__main__":
    main()
