from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from .auth import Authenticator, load_authenticator
from .config import choose_banner, configure
from .errors import TerminalClosed, TtygreetError
from .terminal import Terminal
from .tui import Tui

logger = logging.getLogger(__name__)

_LOG_FILE_ENVVAR = "TTYGREET_LOG_FILE"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="ttygreet", description="Console login screen")
    p.add_argument("--config", help="extra TOML config file layered over the global one")
    p.add_argument("--auth", help="authenticator as 'package.module:callable'")
    p.add_argument("--banner", help="banner name instead of a random one")
    p.add_argument("--log-file", default=os.getenv(_LOG_FILE_ENVVAR))
    p.add_argument("--log-level", default="INFO")
    return p.parse_args(argv)


def _setup_logging(log_file: Optional[str], level: str) -> Optional[logging.Handler]:
    pkg_logger = logging.getLogger("ttygreet")
    # The terminal belongs to the form, so only ever log to a file.
    if not log_file:
        if not pkg_logger.handlers:
            pkg_logger.addHandler(logging.NullHandler())
        return None
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return handler


def main(argv: list[str], terminal: Optional[Terminal] = None) -> int:
    args = _parse_args(argv)
    handler = _setup_logging(args.log_file, args.log_level)
    try:
        return _run(args, terminal)
    finally:
        if handler is not None:
            logging.getLogger("ttygreet").removeHandler(handler)
            handler.close()


def _run(args: argparse.Namespace, terminal: Optional[Terminal]) -> int:
    try:
        cfg = configure(config_path=args.config)
        backend = args.auth or cfg.auth_backend
        if not backend:
            raise TtygreetError("no authenticator configured (use --auth or [auth] backend)")
        authenticator: Authenticator = load_authenticator(backend)
        art, message = choose_banner(cfg, name=args.banner)
        logger.info("starting with %d session(s), authenticator %s", len(cfg.sessions), backend)
        tui = Tui(cfg, terminal or Terminal(), authenticator, art=art, message=message)
    except TtygreetError as e:
        logger.error("startup failed: %s", e)
        print(f"ttygreet: {e}", file=sys.stderr)
        return 2

    try:
        result = tui.run()
    except TerminalClosed as e:
        logger.error("%s", e)
        return 1

    if result is not None:
        logger.info("logged in %r, session %r", result.username, result.session.name)
    return 0


def run() -> None:
    raise SystemExit(main(sys.argv[1:]))
