"""Main login screen controller.

Owns the UI state and the terminal for the lifetime of the greeter and runs
the read / dispatch / redraw loop until a login succeeds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .ansi import SHOW_CURSOR
from .auth import Authenticator
from .banner import Banner, TermSize
from .config import DEFAULT_GREETING, AsciiArt, Config, Session
from .errors import AuthenticationError, TerminalError
from .forms import PASSWORD_FIELD, SESSION_FIELD, USERNAME_FIELD, FormState, build_login_form
from .keys import Key, KeyEvent, decode_all
from .render import Renderer
from .terminal import Terminal

logger = logging.getLogger(__name__)


@dataclass
class UiState:
    size: TermSize
    form: FormState
    message: str = DEFAULT_GREETING
    logged_in: bool = False
    needs_redraw: bool = True


@dataclass(frozen=True)
class LoginResult:
    session: Session
    username: str


class Tui:
    """
    Login screen.

    Example:
        >>> tui = Tui(get_config(), Terminal(), authenticate)
        >>> result = tui.run()
    """

    def __init__(
        self,
        config: Config,
        terminal: Terminal,
        authenticator: Authenticator,
        art: Optional[AsciiArt] = None,
        message: Optional[str] = None,
    ):
        """
        Capture the terminal state and build the form.

        Raises:
            TerminalError: if the terminal state or size is unavailable
        """
        self.config = config
        self.terminal = terminal
        self.authenticator = authenticator
        self.terminal.open()

        self.banner = Banner.parse(art.art if art is not None else "")
        self.renderer = Renderer(config.colors, field_width=config.form.field_width)
        self.state = UiState(
            size=self.terminal.size(),
            form=build_login_form(config),
            message=DEFAULT_GREETING if message is None else message,
        )
        self._result: Optional[LoginResult] = None

    @property
    def form(self) -> FormState:
        return self.state.form

    def run(self) -> Optional[LoginResult]:
        """
        Show the form and process keys until a login succeeds.

        Returns:
            The chosen session and user once authenticated

        Raises:
            SystemExit: with status 1 on Ctrl-C, after restoring the terminal
            TerminalClosed: when input ends
        """
        with self.terminal.raw():
            try:
                self.state.needs_redraw = True
                self.draw()

                while not self.state.logged_in:
                    try:
                        codes = self.terminal.read_key_sequence()
                    except OSError as e:
                        logger.warning("terminal read failed: %s", e)
                        self.state.message = f"Read error: {e}"
                        self.draw()
                        continue

                    for event in decode_all(codes):
                        self.handle_input(event)
                        if self.state.logged_in:
                            break
                    if self.state.logged_in:
                        break
                    self.draw()
            finally:
                self.terminal.write(SHOW_CURSOR)

        return self._result

    def handle_input(self, event: KeyEvent) -> None:
        if event.key == Key.UP:
            self.form.focus_prev()
        elif event.key in (Key.DOWN, Key.TAB):
            self.form.focus_next()
        elif event.key == Key.ENTER:
            if self.form.submit():
                self.login()
        elif event.key == Key.INTERRUPT:
            logger.info("interrupted")
            raise SystemExit(1)
        else:
            self.form.focused.handle_key(event)

    def _resolve_session(self, name: str) -> Session:
        session = self.config.find_session(name) if name else None
        if session is None:
            logger.warning("session %r not in catalog, authenticating without one", name)
            return Session()
        return session

    def login(self) -> None:
        """Authenticate with the current field contents.

        The authenticator runs with the terminal in cooked mode. Any exception
        it raises is a failed attempt: only the password is cleared and the
        error text becomes the status message. On success the loop stops.
        """
        self.state.needs_redraw = True

        session_name = self.form.text_of(SESSION_FIELD)
        username = self.form.text_of(USERNAME_FIELD)
        password = self.form.text_of(PASSWORD_FIELD)
        session = self._resolve_session(session_name)

        logger.info("login attempt for %r (session %r)", username, session.name)
        try:
            with self.terminal.cooked():
                self.authenticator(username, password, session)
        except AuthenticationError as e:
            logger.info("authentication failed for %r: %s", username, e)
            self._login_failed(e)
            return
        except Exception as e:
            logger.exception("authenticator error for %r", username)
            self._login_failed(e)
            return

        logger.info("authenticated %r", username)
        self.state.message = self.config.form.success_message
        self.state.logged_in = True
        self._result = LoginResult(session=session, username=username)

    def _login_failed(self, error: Exception) -> None:
        password_field = self.form.get(PASSWORD_FIELD)
        if password_field is not None:
            password_field.reset()
        self.state.message = str(error) or type(error).__name__

    def _refresh_size(self) -> None:
        try:
            size = self.terminal.size()
        except TerminalError as e:
            logger.debug("keeping previous terminal size: %s", e)
            return
        if size != self.state.size:
            logger.debug("terminal resized to %sx%s", size.cols, size.lines)
            self.state.size = size
            self.state.needs_redraw = True

    def draw(self) -> None:
        self._refresh_size()
        frame = self.renderer.frame(
            self.state.size,
            self.banner,
            self.form,
            self.state.message,
            full=self.state.needs_redraw,
        )
        self.terminal.write(frame)
        self.state.needs_redraw = False
