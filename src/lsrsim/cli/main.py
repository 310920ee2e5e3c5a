from __future__ import annotations

import argparse
import json
import logging
import sys

import yaml

from lsrsim.cli.run import run_script, with_overrides
from lsrsim.cli.validate import LOG_LEVELS, OUTPUT_FORMATS, validate_config
from lsrsim.report.text import render
from lsrsim.runtime.config import effective_config, load_sim_config
from lsrsim.utils.io import load_yaml


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lsrsim", description="Link-state routing simulator")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Run a link-state script and print router tables")
    p_run.add_argument("--input", required=True, help="Script path (text or YAML), '-' for stdin.")
    p_run.add_argument("--config", default=None, help="YAML simulation config.")
    p_run.add_argument("--format", default=None, choices=list(OUTPUT_FORMATS))
    p_run.add_argument("--trace", default=None, help="Write a JSONL event trace to this path.")
    p_run.add_argument("--log-level", default=None, choices=list(LOG_LEVELS), help="Logging verbosity.")

    p_validate = sub.add_parser("validate", help="Validate a config file")
    p_validate.add_argument("--config", required=True)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.cmd == "run":
        try:
            config = load_sim_config(args.config)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            print(f"lsrsim: {exc}", file=sys.stderr)
            return 2
        config = with_overrides(config, fmt=args.format, trace=args.trace, log_level=args.log_level)
        logging.basicConfig(
            level=getattr(logging, config.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        try:
            result = run_script(args.input, config)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            print(f"lsrsim: {exc}", file=sys.stderr)
            return 2
        sys.stdout.write(render(result, config.output.format))
        return 0

    if args.cmd == "validate":
        try:
            cfg = effective_config(load_yaml(args.config))
        except (OSError, TypeError, ValueError, yaml.YAMLError) as exc:
            print(json.dumps({"ok": False, "errors": [str(exc)]}, ensure_ascii=False, indent=2))
            return 1
        errors = validate_config(cfg)
        if errors:
            print(json.dumps({"ok": False, "errors": errors}, ensure_ascii=False, indent=2))
            return 1
        print(json.dumps({"ok": True}, ensure_ascii=False, indent=2))
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
