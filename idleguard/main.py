"""Main entry point for Idleguard."""

import argparse
import sys
from pathlib import Path

from idleguard.runtime.controller import RuntimeController


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(
        description="Idleguard - back office session with inactivity logout"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: $IDLEGUARD_CONFIG or config/default.yaml)",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="store_true",
        help="Show version and exit",
    )

    args = parser.parse_args(argv)

    if args.version:
        from idleguard import __version__

        print(f"Idleguard v{__version__}")
        return 0

    # Create and run controller
    try:
        controller = RuntimeController(config_path=args.config)
        controller.start()
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    except Exception as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
