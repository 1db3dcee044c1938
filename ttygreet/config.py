from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass, field, replace
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple

from .ansi import BG_BLUE, BOLD, BRIGHT_WHITE, CYAN, WHITE, YELLOW
from .errors import ConfigError

logger = logging.getLogger(__name__)

_FIELD_WIDTH_ENVVAR = "TTYGREET_FIELD_WIDTH"
_MASK_CHAR_ENVVAR = "TTYGREET_MASK_CHAR"
_LAST_USER_ENVVAR = "TTYGREET_LAST_USER"
_LAST_SESSION_ENVVAR = "TTYGREET_LAST_SESSION"

_GLOBAL_CONFIG_ENVVAR = "TTYGREET_CONFIG"

DEFAULT_GREETING = "SATA ANDAGI"


_override_config_path: Optional[Path] = None


def _int_from_env(var_name: str, default: int) -> int:
    raw = os.getenv(var_name)
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        logger.warning("ignoring non-integer %s=%r", var_name, raw)
        return default


@dataclass(frozen=True)
class Session:
    """A login target. The zero value means "no session chosen"."""

    name: str = ""
    exec: str = ""
    desktop_type: str = ""


@dataclass(frozen=True)
class LastSession:
    session: str = ""
    user: str = ""


@dataclass(frozen=True)
class AsciiArt:
    art: str = ""
    messages: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FormConfig:
    field_width: int = 24
    max_length: int = 255
    mask_char: str = "*"
    success_message: str = "Success!"


@dataclass(frozen=True)
class ThemeColors:
    label: str = WHITE
    input: str = WHITE
    input_focused: str = BRIGHT_WHITE + BG_BLUE + BOLD
    status: str = YELLOW
    banner: str = CYAN


@dataclass(frozen=True)
class Config:
    sessions: Tuple[Session, ...] = ()
    last_session: Optional[LastSession] = None
    banners: Dict[str, AsciiArt] = field(default_factory=dict)
    form: FormConfig = FormConfig()
    colors: ThemeColors = ThemeColors()
    auth_backend: Optional[str] = None

    def find_session(self, name: str) -> Optional[Session]:
        for session in self.sessions:
            if session.name == name:
                return session
        return None


def _default_global_config_path() -> Path:
    p = os.getenv(_GLOBAL_CONFIG_ENVVAR)
    if p:
        return Path(p)

    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ttygreet" / "config.toml"

    return Path.home() / ".config" / "ttygreet" / "config.toml"


def _load_toml(path: Path) -> dict:
    import tomllib

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    try:
        data = tomllib.loads(raw.decode("utf-8", errors="replace"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e
    return data


def _parse_sessions(items, path: Path) -> Tuple[Session, ...]:
    if not isinstance(items, list):
        raise ConfigError(f"{path}: 'sessions' must be an array of tables")
    out = []
    for item in items:
        if not isinstance(item, dict) or not str(item.get("name") or "").strip():
            raise ConfigError(f"{path}: every session needs a name")
        out.append(
            Session(
                name=str(item["name"]).strip(),
                exec=str(item.get("exec") or ""),
                desktop_type=str(item.get("type") or ""),
            )
        )
    return tuple(out)


def _parse_banner(name: str, data: dict, base_dir: Path) -> AsciiArt:
    if "art" in data:
        art = str(data.get("art") or "")
    elif "file" in data:
        art_path = base_dir / str(data["file"])
        try:
            art = art_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"banner {name!r}: cannot read {art_path}: {e}") from e
    else:
        raise ConfigError(f"banner {name!r} needs 'art' or 'file'")

    messages = data.get("messages") or []
    if not isinstance(messages, list):
        raise ConfigError(f"banner {name!r}: 'messages' must be a list")
    return AsciiArt(art=art.rstrip("\n"), messages=tuple(str(m) for m in messages))


def _config_from_dict(base: Config, data: dict, path: Path) -> Config:
    cfg = base

    if "sessions" in data:
        cfg = replace(cfg, sessions=_parse_sessions(data.get("sessions"), path))

    last = data.get("last_session")
    if isinstance(last, dict):
        cfg = replace(
            cfg,
            last_session=LastSession(
                session=str(last.get("session") or ""),
                user=str(last.get("user") or ""),
            ),
        )

    banners_data = data.get("banners")
    if isinstance(banners_data, dict):
        banners = dict(cfg.banners)
        for name, banner_data in banners_data.items():
            if isinstance(banner_data, dict):
                banners[name] = _parse_banner(name, banner_data, path.parent)
        cfg = replace(cfg, banners=banners)

    form = cfg.form
    form_data = data.get("form")
    if isinstance(form_data, dict):
        for k in ("field_width", "max_length"):
            if k in form_data:
                try:
                    form = replace(form, **{k: int(form_data[k])})
                except (TypeError, ValueError) as e:
                    raise ConfigError(f"{path}: form.{k} must be an integer") from e
        if "mask_char" in form_data:
            form = replace(form, mask_char=str(form_data["mask_char"] or "*")[:1])
        if "success_message" in form_data:
            form = replace(form, success_message=str(form_data["success_message"]))
    cfg = replace(cfg, form=form)

    theme_data = data.get("theme")
    if isinstance(theme_data, dict):
        colors = cfg.colors
        colors_data = theme_data.get("colors")
        if isinstance(colors_data, dict):
            for k in ("label", "input", "input_focused", "status", "banner"):
                if k in colors_data:
                    v = colors_data.get(k)
                    colors = replace(colors, **{k: "" if v is None else str(v)})
        cfg = replace(cfg, colors=colors)

    auth_data = data.get("auth")
    if isinstance(auth_data, dict) and auth_data.get("backend"):
        cfg = replace(cfg, auth_backend=str(auth_data["backend"]))

    return cfg


def _apply_env_overrides(cfg: Config) -> Config:
    form = cfg.form

    if os.getenv(_FIELD_WIDTH_ENVVAR) is not None:
        form = replace(form, field_width=_int_from_env(_FIELD_WIDTH_ENVVAR, form.field_width))

    if os.getenv(_MASK_CHAR_ENVVAR):
        form = replace(form, mask_char=str(os.getenv(_MASK_CHAR_ENVVAR))[:1])

    last = cfg.last_session
    user = os.getenv(_LAST_USER_ENVVAR)
    session = os.getenv(_LAST_SESSION_ENVVAR)
    if user is not None or session is not None:
        last = last or LastSession()
        if user is not None:
            last = replace(last, user=user)
        if session is not None:
            last = replace(last, session=session)

    return replace(cfg, form=form, last_session=last)


def load_config(*, config_path: Optional[str | Path] = None) -> Config:
    """Build the configuration from the global file, an optional explicit file and the environment."""
    cfg = Config()

    gpath = _default_global_config_path()
    if gpath.exists() and gpath.is_file():
        logger.debug("loading config from %s", gpath)
        cfg = _config_from_dict(cfg, _load_toml(gpath), gpath)

    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"config file not found: {path}")
        logger.debug("loading config from %s", path)
        cfg = _config_from_dict(cfg, _load_toml(path), path)

    return _apply_env_overrides(cfg)


def configure(*, config_path: Optional[str | Path] = None) -> Config:
    global _override_config_path

    _override_config_path = Path(config_path) if config_path is not None else None

    get_config.cache_clear()
    return get_config()


@lru_cache(maxsize=1)
def get_config() -> Config:
    return load_config(config_path=_override_config_path)


def choose_banner(
    cfg: Config,
    rng: Optional[random.Random] = None,
    name: Optional[str] = None,
) -> Tuple[AsciiArt, str]:
    """Pick the banner to show and its welcome message.

    With ``name`` the banner is looked up directly, otherwise one is chosen at
    random. Falls back to an empty banner and the default greeting.
    """
    rng = rng or random.Random()
    if name is not None:
        art = cfg.banners.get(name)
        if art is None:
            raise ConfigError(f"unknown banner {name!r}")
    elif cfg.banners:
        art = cfg.banners[rng.choice(sorted(cfg.banners))]
    else:
        return AsciiArt(), DEFAULT_GREETING

    message = rng.choice(art.messages) if art.messages else DEFAULT_GREETING
    return art, message
