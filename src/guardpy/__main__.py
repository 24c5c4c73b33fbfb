"""Main function for guardpy."""

from guardpy.core import cli


def run_main() -> None:
    """Main entry point to guardpy."""
    cli.app()


if __name__ == "__main__":
    cli.app()
