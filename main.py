"""Entry point for the Labeleer label synchronization tool."""

import argparse

from labeleer_cli.cli import run


def main() -> None:
    """Parse CLI arguments and start the interactive session."""
    parser = argparse.ArgumentParser(
        description="Synchronize a local label file with a Labeleer project",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to a YAML settings file (default: .labeleer.yaml if present)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Create or show the labeleer.json project setup",
    )
    args = parser.parse_args()
    run(config_path=args.config, verbose=args.verbose, init=args.init)


if __name__ == "__main__":
    main()
