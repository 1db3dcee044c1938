"""
ttygreet - a console login screen.

This package provides:
- A session picker and username/password fields with keyboard focus
- A centered ASCII-art banner that degrades gracefully on small terminals
- Raw mode terminal handling with guaranteed restore
- A pluggable authenticator hook
"""

__version__ = "0.1.0"

from .auth import Authenticator, load_authenticator
from .banner import Banner, BannerLine, TermSize
from .config import AsciiArt, Config, LastSession, Session, choose_banner, configure, get_config, load_config
from .errors import AuthenticationError, ConfigError, TerminalClosed, TerminalError, TtygreetError
from .fields import Field, Picker, TextInput
from .forms import FormState, build_login_form
from .keys import Key, KeyEvent, decode
from .render import Renderer
from .terminal import Terminal
from .tui import LoginResult, Tui, UiState

__all__ = [
    "Authenticator",
    "load_authenticator",
    "Banner",
    "BannerLine",
    "TermSize",
    "AsciiArt",
    "Config",
    "LastSession",
    "Session",
    "choose_banner",
    "configure",
    "get_config",
    "load_config",
    "AuthenticationError",
    "ConfigError",
    "TerminalClosed",
    "TerminalError",
    "TtygreetError",
    "Field",
    "Picker",
    "TextInput",
    "FormState",
    "build_login_form",
    "Key",
    "KeyEvent",
    "decode",
    "Renderer",
    "Terminal",
    "LoginResult",
    "Tui",
    "UiState",
]
