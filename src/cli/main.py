"""
Main CLI Module for Swing Zone Levels

Commands:
- levels: Compute swing zones, rays and regime for a CSV file
- serve: Run the Levels API server

Usage:
    python -m src.cli.main levels --data es-2h.csv
    python -m src.cli.main levels --data es-2h.csv --preset balanced --rays --format text
    python -m src.cli.main serve --port 8000
"""

import argparse
import json
import logging
import sys

import uvicorn

from src.data.ohlc_loader import load_candles
from src.swing_zone.constants import DEFAULT_CANDLE_TAIL, PRESETS
from src.swing_zone.levels import (
    build_indicator_levels,
    format_indicator_section,
    summarize_swing_zone,
)
from src.swing_zone.swing_config import SwingZoneSettings
from src.swing_zone.swing_detector import analyze

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_settings(args) -> SwingZoneSettings:
    """Settings from CLI flags: preset first, then explicit overrides."""
    overrides = {'enable_rays': args.rays}
    if args.sensitivity is not None:
        overrides['sensitivity'] = args.sensitivity
    if args.max_swing_points is not None:
        overrides['max_swing_points'] = args.max_swing_points
    return SwingZoneSettings.preset(args.preset, **overrides)


def run_levels_command(args) -> bool:
    """Compute levels for a CSV file and print them."""
    _configure_logging(args.verbose)

    try:
        settings = build_settings(args)
        candles = load_candles(args.data, tail=args.tail)
        analysis = analyze(candles, settings)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to compute levels for {args.data}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return False

    levels = build_indicator_levels(analysis.zone, analysis.rays)
    if args.format == 'json':
        print(json.dumps(levels, indent=2))
    elif args.format == 'summary':
        print(summarize_swing_zone(analysis.zone))
    else:
        print(format_indicator_section(levels))
    return True


def run_serve_command(args) -> bool:
    """Run the Levels API with uvicorn."""
    _configure_logging(args.verbose)
    logger.info(f"Starting Levels Server on {args.host}:{args.port}")
    uvicorn.run(
        "src.levels_server.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return True


def create_parser():
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        description="Swing Zone levels CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    levels_parser = subparsers.add_parser(
        'levels',
        help='Compute swing zones, rays and regime for a CSV file'
    )
    levels_parser.add_argument(
        '--data',
        required=True,
        help='Path to OHLC CSV data file'
    )
    levels_parser.add_argument(
        '--tail',
        type=int,
        default=DEFAULT_CANDLE_TAIL,
        help=f'Use the most recent N candles (default: {DEFAULT_CANDLE_TAIL})'
    )
    levels_parser.add_argument(
        '--preset',
        choices=list(PRESETS),
        default='aggressive',
        help='Sensitivity preset (default: aggressive)'
    )
    levels_parser.add_argument(
        '--sensitivity',
        type=int,
        help='Override zone pivot window half-width'
    )
    levels_parser.add_argument(
        '--max-swing-points',
        type=int,
        help='Override zone recency cap'
    )
    levels_parser.add_argument(
        '--rays',
        action='store_true',
        help='Also compute swing rays'
    )
    levels_parser.add_argument(
        '--format',
        choices=['json', 'text', 'summary'],
        default='json',
        help='Output format (default: json)'
    )
    levels_parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    serve_parser = subparsers.add_parser(
        'serve',
        help='Run the Levels API server'
    )
    serve_parser.add_argument(
        '--host',
        default='127.0.0.1',
        help='Host to bind to (default: 127.0.0.1)'
    )
    serve_parser.add_argument(
        '--port',
        type=int,
        default=8000,
        help='Port to run server on (default: 8000)'
    )
    serve_parser.add_argument(
        '--reload',
        action='store_true',
        help='Enable auto-reload for development'
    )
    serve_parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    return parser


def main(argv=None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == 'levels':
        return 0 if run_levels_command(args) else 1
    elif args.command == 'serve':
        return 0 if run_serve_command(args) else 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
