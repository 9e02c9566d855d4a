"""Lightweight REST client for the fantabid API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_config(raw: str) -> str | None:
    if not raw:
        return None
    try:
        json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid config JSON: {exc}") from exc
    return raw


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the fantabid REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--session", default=None, help="Draft session id")
    parser.add_argument("--init", type=Path, metavar="ROSTER_CSV", help="Start a draft from a roster CSV")
    parser.add_argument("--config", default="", help="JSON configuration for --init")
    parser.add_argument("--pick", nargs=2, metavar=("NAME", "PRICE"), help="Record a purchase")
    parser.add_argument("--gone", nargs="+", metavar="NAME [PRICE] [OWNER]", help="Mark a player unavailable")
    parser.add_argument("--suggest", action="store_true", help="Print suggestions")
    parser.add_argument("--budget", action="store_true", help="Print budget breakdown")
    parser.add_argument("--export-state", type=Path, help="Write the draft snapshot to a file")
    parser.add_argument("--import-state", type=Path, help="Replace the draft with a snapshot file")
    args = parser.parse_args()

    params = {"session": args.session} if args.session else {}

    with httpx.Client(base_url=args.base_url, params=params) as client:
        if args.init:
            files = {"roster": (args.init.name, args.init.read_bytes(), "text/csv")}
            data = {"config": build_config(args.config)}
            resp = client.post("/draft/init", files=files, data={k: v for k, v in data.items() if v})
            resp.raise_for_status()
            print("Init:", json.dumps(resp.json(), indent=2))

        if args.import_state:
            payload = json.loads(args.import_state.read_text(encoding="utf-8"))
            resp = client.put("/draft/state", json=payload)
            if resp.status_code == 422:
                raise SystemExit(f"snapshot rejected: {resp.json()['detail']}")
            resp.raise_for_status()
            print(f"Imported state from {args.import_state}")

        if args.pick:
            name, price = args.pick
            resp = client.post("/draft/pick", json={"name": name, "price": float(price)})
            if resp.status_code == 404:
                raise SystemExit(f"player {name} not found")
            resp.raise_for_status()
            body = resp.json()
            print(f"Budget remaining: {body['budget_remaining']}")
            for warning in body["warnings"]:
                print(f"warning: {warning}")

        if args.gone:
            name = args.gone[0]
            price = float(args.gone[1]) if len(args.gone) > 1 else None
            owner = args.gone[2] if len(args.gone) > 2 else None
            resp = client.post("/draft/unavailable", json={"name": name, "price": price, "owner": owner})
            resp.raise_for_status()
            for warning in resp.json()["warnings"]:
                print(f"warning: {warning}")

        if args.suggest:
            resp = client.get("/draft/suggestions")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))

        if args.budget:
            resp = client.get("/draft/budget")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))

        if args.export_state:
            resp = client.get("/draft/state")
            resp.raise_for_status()
            args.export_state.write_text(json.dumps(resp.json(), indent=2), encoding="utf-8")
            print(f"State saved to {args.export_state}")


if __name__ == "__main__":
    main()
