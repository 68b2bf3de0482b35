import argparse
import dataclasses
import json
import sys
from pathlib import Path

from config.settings import get_settings
from pipelines.harvest import Harvester
from services.output_writer import OUTPUT_FORMATS, read_harvest_output
from services.reporting import print_summary, summarize_records
from utils.logging_setup import init_logging


def _positive_int(value):
	number = int(value)
	if number < 1:
		raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
	return number


def _settings_from_args(args):
	settings = get_settings()
	overrides = {}
	if args.batch:
		overrides["batch"] = args.batch
	if args.output_dir:
		overrides["output_dir"] = args.output_dir
	if args.max_retries is not None:
		overrides["max_retries"] = args.max_retries
	if args.format:
		overrides["output_format"] = args.format
	if args.max_scrolls is not None:
		overrides["max_scroll_iterations"] = args.max_scrolls
	if args.headed:
		overrides["headless"] = False
	return dataclasses.replace(settings, **overrides) if overrides else settings


def cmd_harvest(args):
	settings = _settings_from_args(args)

	def _progress(cur, total, name):
		print(f"[{cur}/{total}] Fetching founders for {name}")

	harvester = Harvester(settings, on_progress=_progress if args.progress else None)
	ctx = harvester.run()
	print_summary(ctx.meta)
	return 0 if ctx.meta.get("status") == "ok" else 1


def cmd_inspect(args):
	path = Path(args.input)
	if not path.exists():
		print(f"No such file: {path}")
		return 1
	records = read_harvest_output(path)
	print(json.dumps(summarize_records(records), indent=2, ensure_ascii=False))
	return 0


def main(argv=None):
	settings = get_settings()
	init_logging(settings.log_level)
	parser = argparse.ArgumentParser(description="YC company founder harvester")
	sub = parser.add_subparsers(dest="cmd", required=True)

	p_h = sub.add_parser("harvest", help="Scroll the company directory and write founders per company")
	p_h.add_argument("--batch", "-b", type=str, help=f"YC batch to harvest (default: {settings.batch})")
	p_h.add_argument("--output-dir", "-o", type=str, help=f"Directory for the output file (default: {settings.output_dir})")
	p_h.add_argument("--max-retries", type=_positive_int, default=None, help="Attempts per company detail page")
	p_h.add_argument("--format", choices=list(OUTPUT_FORMATS), default=None, help="json (valid JSON) or legacy (trailing comma)")
	p_h.add_argument("--max-scrolls", type=int, default=None, help="Stop the listing after N scroll passes (0 = no limit)")
	p_h.add_argument("--headed", action="store_true", help="Show the browser window")
	p_h.add_argument("--progress", action="store_true", help="Print progress for each company")
	p_h.set_defaults(func=cmd_harvest)

	p_i = sub.add_parser("inspect", help="Summarize a finished or interrupted output file")
	p_i.add_argument("--input", "-i", required=True, help="Path to output JSON file")
	p_i.set_defaults(func=cmd_inspect)

	args = parser.parse_args(argv)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
