"""CLI argument parsing and main entry point.

Provides three subcommands:

* ``keyring-ctl set <service> <user>``    - store a secret read from stdin.
* ``keyring-ctl get <service> <user>``    - write a secret to stdout.
* ``keyring-ctl delete <service> <user>`` - remove a secret.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import textwrap
from typing import Optional, Sequence

from keyring_ctl.config.loader import load_config
from keyring_ctl.constants import (
    APP_NAME,
    APP_VERSION,
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    LOG_LEVEL_ENV_VAR,
)
from keyring_ctl.display.logging_config import setup_logging
from keyring_ctl.errors import KeyringCtlError
from keyring_ctl.operations import SecretOperations
from keyring_ctl.secrets.store import SecretStore
from keyring_ctl.terminal.console import Console

module_logger = logging.getLogger(__name__)


def _long_desc(text: str) -> str:
    return textwrap.dedent(text).strip()


def _example(text: str) -> str:
    lines = [line.strip() for line in textwrap.dedent(text).strip().splitlines()]
    return "examples:\n" + "\n".join(f"  {line}" if line else "" for line in lines)


# ── Subcommands ─────────────────────────────────────────────────────────


def _cmd_set(ops: SecretOperations, args: argparse.Namespace) -> Optional[str]:
    """Entry-point for ``keyring-ctl set``."""
    return ops.store(args.service, args.user, assume_yes=args.yes)


def _cmd_get(ops: SecretOperations, args: argparse.Namespace) -> Optional[str]:
    """Entry-point for ``keyring-ctl get``."""
    ops.retrieve(args.service, args.user)
    return None


def _cmd_delete(ops: SecretOperations, args: argparse.Namespace) -> Optional[str]:
    """Entry-point for ``keyring-ctl delete``."""
    return ops.remove(args.service, args.user, assume_yes=args.yes)


# ── CLI parser construction ──────────────────────────────────────────────


def _add_pair_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("service", help="Service name the secret belongs to")
    parser.add_argument("user", help="User name the secret belongs to")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with set/get/delete subcommands."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Interact with the operating system's keyring.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help=(
            "Path to configuration file (YAML). "
            "Default: $KEYRING_CTL_CONFIG or ~/.config/keyring-ctl/config.yaml"
        ),
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["debug", "info", "warning", "error", "critical"],
        help="Set logging level for stderr (default: warning)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # ── set ─────────────────────────────────────────────────────
    sp_set = subparsers.add_parser(
        "set",
        help="Set secret in keyring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=_long_desc(
            """
            Sets a secret for a service/user combination in the keyring.

            If stdin is a pipe, the secret is read from there. Otherwise it will
            prompt for the secret interactively.
            """
        ),
        epilog=_example(
            """
            # Secret via stdin
            $ echo -n "supersecret" | keyring-ctl set myservice myuser

            # Secret via interactive prompt
            $ keyring-ctl set myservice myuser
            enter secret:
            """
        ),
    )
    _add_pair_arguments(sp_set)
    sp_set.add_argument(
        "--yes",
        action="store_true",
        default=False,
        help="automatically confirm secret overwrite prompts",
    )
    sp_set.set_defaults(func=_cmd_set)

    # ── get ─────────────────────────────────────────────────────
    sp_get = subparsers.add_parser(
        "get",
        help="Read secret from keyring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=_long_desc(
            """
            Reads a secret for a service/user combination from the keyring and
            writes it to stdout.

            If stdout is a terminal a newline character is printed after the secret.
            """
        ),
        epilog=_example(
            """
            # Write secret to stdout
            $ keyring-ctl get myservice myuser

            # Pipe secret into another command
            $ keyring-ctl get myservice myuser | cat
            """
        ),
    )
    _add_pair_arguments(sp_get)
    sp_get.set_defaults(func=_cmd_get)

    # ── delete ──────────────────────────────────────────────────
    sp_delete = subparsers.add_parser(
        "delete",
        help="Delete secret from keyring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=_long_desc(
            """
            Deletes the secret for a service/user combination from the keyring.
            """
        ),
        epilog=_example(
            """
            $ keyring-ctl delete myservice myuser
            """
        ),
    )
    _add_pair_arguments(sp_delete)
    sp_delete.add_argument(
        "--yes",
        action="store_true",
        default=False,
        help="automatically confirm secret deletion prompts",
    )
    sp_delete.set_defaults(func=_cmd_delete)

    return parser


def run(
    argv: Optional[Sequence[str]] = None,
    *,
    console: Optional[Console] = None,
    store: Optional[SecretStore] = None,
) -> int:
    """Parse *argv*, run one subcommand and return the exit status.

    *console* and *store* replace the real stdin/stdout and OS keyring.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_FAILURE

    try:
        config = load_config(args.config)
        setup_logging(
            args.log_level or os.environ.get(LOG_LEVEL_ENV_VAR) or config.log_level,
            config.log_file,
        )
        if store is None:
            store = SecretStore.from_config(config.backend)
        if console is None:
            console = Console.from_sys()

        module_logger.debug("Running '%s' with %s backend", args.command, store.backend_name)
        status = args.func(SecretOperations(store, console), args)
        if status:
            console.stdout.write_text(f"{status}\n")
    except KeyringCtlError as exc:
        module_logger.debug("'%s' failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    except KeyboardInterrupt:
        module_logger.info("%s interrupted by KeyboardInterrupt.", APP_NAME)
        return EXIT_INTERRUPTED
    return 0


def main() -> None:
    """Program entry point: parse arguments and dispatch to subcommand."""
    sys.exit(run(sys.argv[1:]))
