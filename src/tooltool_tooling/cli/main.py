"""Main CLI entry point for tool-tool release tooling."""

import logging
import sys

from tooltool_tooling.cli import commands

COMMANDS = {
    "release": commands.run_release_argv,
    "revision": commands.run_revision_argv,
    "commit": commands.run_commit_argv,
    "build": commands.run_build_argv,
}


def _usage() -> None:
    print("Usage: tooltool [-v] <command> [args...]", file=sys.stderr)
    print("Commands:", file=sys.stderr)
    print(
        "  release [major|minor|patch]  - Bump version, commit, tag v<version>, push",
        file=sys.stderr,
    )
    print(
        "  revision                     - Print <YYYYMMDD>-<hash>[-dev] for the checkout",
        file=sys.stderr,
    )
    print(
        "  commit [--gate-only]         - fmt/clippy/test, then jj desc/new and push to mainline",
        file=sys.stderr,
    )
    print(
        "  build                        - cargo build --release with TOOL_TOOL_REVISION set",
        file=sys.stderr,
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    if argv is None:
        argv = sys.argv[1:]
    verbose = False
    while argv and argv[0] in ("-v", "--verbose"):
        verbose = True
        argv = argv[1:]
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not argv:
        _usage()
        sys.exit(1)

    command, rest = argv[0], argv[1:]
    handler = COMMANDS.get(command)
    if handler is None:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        _usage()
        sys.exit(1)
    sys.exit(handler(rest))


if __name__ == "__main__":
    main()
