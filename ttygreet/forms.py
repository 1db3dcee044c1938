"""
Login form: an ordered list of fields with a single, non-wrapping focus.
"""

from __future__ import annotations

from typing import List, Optional

from .config import Config
from .fields import Field, Picker, TextInput

SESSION_FIELD = "session"
USERNAME_FIELD = "username"
PASSWORD_FIELD = "password"


class FormState:
    """
    Fields plus the index of the focused one.

    Focus stops at both ends instead of wrapping around, so Enter on the
    last field is the only way to submit.
    """

    def __init__(self, fields: List[Field], focus: int = 0):
        if not fields:
            raise ValueError("a form needs at least one field")
        self.fields = fields
        self.focus = max(0, min(int(focus), len(fields) - 1))

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def focused(self) -> Field:
        return self.fields[self.focus]

    def focus_next(self) -> None:
        self.focus = min(self.focus + 1, len(self.fields) - 1)

    def focus_prev(self) -> None:
        self.focus = max(self.focus - 1, 0)

    def is_last_field(self) -> bool:
        return self.focus == len(self.fields) - 1

    def submit(self) -> bool:
        """Advance focus, or return True when Enter was pressed on the last field."""
        if self.is_last_field():
            return True
        self.focus_next()
        return False

    def get(self, name: str) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def index_of(self, name: str) -> Optional[int]:
        for i, f in enumerate(self.fields):
            if f.name == name:
                return i
        return None

    def text_of(self, name: str) -> str:
        f = self.get(name)
        return f.get_text() if f is not None else ""


def build_login_form(cfg: Config) -> FormState:
    """
    Create the session / username / password form from the configuration.

    The picker is left out when no sessions are configured. The last used
    session preselects the picker and moves focus to the username field; the
    last used user prefills the username.
    """
    fields: List[Field] = []
    focus = 0

    last = cfg.last_session
    if cfg.sessions:
        names = [s.name for s in cfg.sessions]
        selected = 0
        if last is not None and last.session in names:
            selected = names.index(last.session)
            focus = 1
        fields.append(Picker(SESSION_FIELD, names, selected=selected))

    fields.append(
        TextInput(
            USERNAME_FIELD,
            contents=last.user if last is not None else "",
            max_length=cfg.form.max_length,
        )
    )
    fields.append(
        TextInput(
            PASSWORD_FIELD,
            masked=True,
            max_length=cfg.form.max_length,
            mask_char=cfg.form.mask_char,
        )
    )
    return FormState(fields, focus=focus)
