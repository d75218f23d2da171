"""Thin shim for IDEs and direct execution."""

from daily_dashboard.cli import main

if __name__ == "__main__":
    import sys

    # Default to debug logging when running the shim directly.
    if not any(arg.startswith("--log-level") for arg in sys.argv):
        sys.argv.extend(["--log-level", "DEBUG"])

    sys.exit(main())
