import sys
import argparse
import json
import logging
from .analyzer import GCodeParser, analyze_gcode_file
from .config import load_config_from_env


def main(argv=None):
    parser = argparse.ArgumentParser(description="G-code metadata & print time estimator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Summarize command
    sum_parser = subparsers.add_parser("summarize", help="Summarize G-code file")
    sum_parser.add_argument("file", help="Path to G-code file")

    # Metadata command (슬라이서 주석만)
    meta_parser = subparsers.add_parser("metadata", help="Print slicer comment metadata only")
    meta_parser.add_argument("file", help="Path to G-code file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "summarize":
        try:
            report = analyze_gcode_file(args.file, load_config_from_env())
            print(json.dumps(report.model_dump(), indent=2, ensure_ascii=False))
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "metadata":
        try:
            gcode = GCodeParser.from_file(args.file, load_config_from_env())
            print(json.dumps(gcode.metadata.model_dump(), indent=2, ensure_ascii=False))
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    else:
        parser.print_help()

if __name__ == "__main__":
    main()
