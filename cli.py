from __future__ import annotations

import argparse
import sys
import time

import uvicorn

from depgraph.config import get_settings, load_analysis_config
from depgraph.errors import DiscoveryError
from depgraph.logger_config import setup_logging
from depgraph.model import AnalysisResult
from depgraph.pipeline import analyze_repository
from depgraph.summarize import build_prompt_context, render_summary


def _run_analysis(args: argparse.Namespace) -> AnalysisResult:
	config = load_analysis_config(args.config)
	deadline = time.monotonic() + args.timeout if args.timeout else None
	return analyze_repository(args.path, config, max_workers=args.workers, deadline=deadline)


def cmd_analyze(args: argparse.Namespace) -> None:
	result = _run_analysis(args)
	if args.summary:
		print(render_summary(result))
	else:
		print(result.to_json())


def cmd_prompt(args: argparse.Namespace) -> None:
	result = _run_analysis(args)
	print(build_prompt_context(result, args.question))


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def _add_analysis_options(p: argparse.ArgumentParser) -> None:
	p.add_argument("path", help="Path to repository root")
	p.add_argument("--config", help="JSON file with analysis options")
	p.add_argument("--workers", type=int, default=None, help="Number of parser threads")
	p.add_argument("--timeout", type=float, default=None, help="Stop after this many seconds")


def build_parser() -> argparse.ArgumentParser:
	settings = get_settings()
	parser = argparse.ArgumentParser(prog="depgraph")
	parser.add_argument("--log-level", default=None, help="Override DEPGRAPH_LOG_LEVEL")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Analyze a source tree and print the result JSON")
	_add_analysis_options(pa)
	pa.add_argument("--summary", action="store_true", help="Print a text summary instead of JSON")
	pa.set_defaults(func=cmd_analyze)

	pp = sub.add_parser("prompt", help="Print the question prompt context for a source tree")
	_add_analysis_options(pp)
	pp.add_argument("question", help="Question about the codebase")
	pp.set_defaults(func=cmd_prompt)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default=settings.API_HOST)
	ps.add_argument("--port", type=int, default=settings.API_PORT)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv=None) -> int:
	args = build_parser().parse_args(argv)
	setup_logging(level=args.log_level)
	try:
		args.func(args)
	except DiscoveryError as e:
		print(f"Error: {e}", file=sys.stderr)
		return 2
	return 0


if __name__ == "__main__":
	sys.exit(main())
