"""Command-line entrypoint: run a saved workflow and stream its events."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from .core.config import ConfigError, PRIMARY, SECONDARY, load_config, resolve_config
from .core.engine.runner import PipelineRunner, RunResult
from .core.pipeline.sink import PrintEventSink
from .export.files import DirectoryArtifactSink

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CREDENTIAL_REQUIRED = 2


def load_workflow(path: str) -> Dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Workflow root must be an object, got: {type(data).__name__}")
    return data


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="nodeflow", description="Execute NodeFlow workflows.")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run a workflow snapshot (JSON) from start to finish.")
    run.add_argument("graph", help="Path to the workflow JSON ({nodes: [...], edges: [...]}).")
    run.add_argument("--config", default=None, help="Project config file (YAML or JSON).")
    run.add_argument("--local", default=None, help="Optional local overrides, applied after --config.")
    run.add_argument(
        "--output-dir",
        default=None,
        help="Where downloaded files are written (defaults to output.directory, else the cwd).",
    )
    run.add_argument(
        "--openai-key",
        default=None,
        help="Secondary provider key for this run only; never stored.",
    )
    return parser.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> Dict[str, Any]:
    if args.config:
        return load_config(defaults_path=args.config, local_path=args.local)
    if args.local:
        return load_config(defaults_path=args.local)
    return resolve_config()


def _exit_code(result: RunResult) -> int:
    if result.ok:
        return EXIT_OK
    details = (result.error or {}).get("details") or {}
    if result.needs_credential and details.get("provider") == SECONDARY:
        return EXIT_CREDENTIAL_REQUIRED
    return EXIT_ERROR


def run_workflow(args: argparse.Namespace) -> int:
    try:
        config = _resolve_config(args)
        snapshot = load_workflow(args.graph)
    except (ConfigError, OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    output_dir = args.output_dir or config["output"].get("directory") or "."
    artifacts = DirectoryArtifactSink(output_dir)
    runner = PipelineRunner(
        config=config,
        event_sink=PrintEventSink(sys.stdout),
        artifact_sink=artifacts,
    )

    result = runner.run(snapshot, secondary_credential=args.openai_key)

    for path in artifacts.saved:
        print(f"Saved: {path}")
    for name in artifacts.offered:
        print(f"Available (not saved): {name}")

    code = _exit_code(result)
    if code == EXIT_CREDENTIAL_REQUIRED:
        label = config["providers"][SECONDARY].get("label") or SECONDARY
        print(f"{label} API key required: re-run with --openai-key.", file=sys.stderr)
    elif code == EXIT_ERROR and (result.error or {}).get("details", {}).get("provider") == PRIMARY:
        env = config["providers"][PRIMARY].get("api_key_env") or "API_KEY"
        print(f"Set {env} and re-run.", file=sys.stderr)
    return code


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    if args.command == "run":
        return run_workflow(args)
    return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
