"""Option CLI: inspect and change player options without the terminal UI.

Boots the option layer headless against a config directory, performs one
request and shuts down again, which stores the format templates.

Exit codes: 0 success, 1 unknown option, 2 rejected value, 3 another player
holds the lock on the config directory.

Example:
  python -m cli.options --config-dir ~/.config/tuneshell --set format_title "%a - %t"
  python -m cli.options --list --json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Dict, List

from config.settings import CONFIG_DIR
from tui.app.bootstrap import create_app, shutdown_app, single_instance
from tui.services.event_bus import PlayerEvent
from tui.services.option_registry import SetStatus


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Inspect or change player options")
    p.add_argument("--config-dir", type=str, help="Directory holding options.json")
    group = p.add_mutually_exclusive_group(required=True)
    group.add_argument("--list", action="store_true", help="List every option and its value")
    group.add_argument("--get", metavar="NAME", help="Print the value of one option")
    group.add_argument("--set", nargs=2, metavar=("NAME", "VALUE"), help="Change one option")
    p.add_argument("--json", action="store_true", help="Output JSON")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config_dir = args.config_dir or CONFIG_DIR
    with single_instance(config_dir) as acquired:
        if not acquired:
            print(f"another player is using {config_dir}", file=sys.stderr)
            return 3
        return _run(args, config_dir)


def _run(args: argparse.Namespace, config_dir: str) -> int:
    ctx = create_app(config_dir)
    messages: List[str] = []
    ctx.bus.subscribe(PlayerEvent.ERROR_MESSAGE, lambda evt: messages.append(str(evt.payload)))
    exit_code = 0
    try:
        if args.list:
            values: Dict[str, str] = {d.name: d.get() for d in ctx.registry}
            if args.json:
                print(json.dumps(values, indent=2))
            else:
                for name, value in values.items():
                    print(f"{name}={value}")
        elif args.get:
            value = ctx.registry.read(args.get)
            if value is None:
                print(f"no such option {args.get}", file=sys.stderr)
                exit_code = 1
            elif args.json:
                print(json.dumps({args.get: value}))
            else:
                print(value)
        else:
            name, text = args.set
            result = ctx.registry.apply(name, text)
            if result.status is SetStatus.NOT_FOUND:
                exit_code = 1
            elif result.status is SetStatus.INVALID:
                exit_code = 2
            if args.json:
                print(
                    json.dumps(
                        {
                            "name": name,
                            "status": result.status.value,
                            "value": ctx.registry.read(name),
                            "messages": messages,
                        }
                    )
                )
            else:
                for msg in messages:
                    print(msg, file=sys.stderr)
                if result.message and result.status is SetStatus.NOT_FOUND:
                    print(result.message, file=sys.stderr)
    finally:
        shutdown_app(ctx)
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
