"""
Per-session memory of the last inputs of each calculator.

`state` is st.session_state in the app (anything dict-like in tests). Nothing
outlives the browser session.
"""

import copy
import logging
from datetime import date, datetime

from dateutil import parser as date_parser

from config import DEFAULTS

logger = logging.getLogger(__name__)

DEDUCTION_KEY = "deduction_inputs"
FREELANCE_KEY = "freelance_inputs"

_SECTIONS = {DEDUCTION_KEY: "deductions", FREELANCE_KEY: "freelance"}


def _parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.isoparse(str(value)).date()


def _coerce(key: str, saved: dict) -> dict:
    defaults = DEFAULTS[_SECTIONS[key]]
    values = copy.deepcopy(defaults)
    for name, default in defaults.items():
        if name not in saved:
            continue
        raw = saved[name]
        try:
            if isinstance(default, date):
                values[name] = _parse_date(raw)
            elif isinstance(default, bool):
                values[name] = bool(raw)
            else:
                values[name] = float(raw)
        except (TypeError, ValueError, OverflowError):
            logger.warning("Ignoring saved %s.%s=%r, using default %r", key, name, raw, default)
    return values


def load_inputs(state, key: str) -> dict:
    """Saved inputs for `key` merged over the defaults; stores the result back."""
    saved = state.get(key) or {}
    values = _coerce(key, saved)
    state[key] = values
    return dict(values)


def save_inputs(state, key: str, values: dict) -> None:
    state[key] = _coerce(key, values)


def reset_inputs(state, key: str) -> dict:
    logger.info("Resetting %s to defaults", key)
    state.pop(key, None)
    return load_inputs(state, key)
