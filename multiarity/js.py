"""
JS runtime shim

A thin js layer so code written against the browser globals can run
with minimal changes: errors, Date, RegExp, number parsing, console,
String.fromCharCode and a few string methods.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List
import math
import re

from .arity import MultiArityFn
from .errors import JSError, JSTypeError
from .io_adapter import get_adapter
from .printing import render


# =============================================================================
# DATE
# =============================================================================

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Date:
    """Milliseconds since the epoch, read back in UTC"""

    def __init__(self, millis: int):
        self.millis = int(millis)

    def _time(self) -> datetime:
        # datetime stops at year 9999, short of the JS range
        try:
            return _EPOCH + timedelta(milliseconds=self.millis)
        except OverflowError:
            raise JSError(f"Invalid time value: {self.millis}") from None

    def get_utc_full_year(self) -> int:
        return self._time().year

    def get_utc_month(self) -> int:
        """0-indexed, January is 0"""
        return self._time().month - 1

    def get_utc_date(self) -> int:
        return self._time().day

    def get_utc_hours(self) -> int:
        return self._time().hour

    def get_utc_minutes(self) -> int:
        return self._time().minute

    def get_utc_seconds(self) -> int:
        return self._time().second

    def get_utc_milliseconds(self) -> int:
        return self._time().microsecond // 1000

    def to_string(self) -> str:
        return str(self)

    def __eq__(self, other):
        return isinstance(other, Date) and other.millis == self.millis

    def __hash__(self):
        return hash(self.millis)

    def __str__(self):
        return self._time().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3] + " +0000 UTC"

    def __repr__(self):
        return f"Date({self.millis})"


# =============================================================================
# REGEXP
# =============================================================================

# "g" only changes match state in JS; exec here always returns every match
_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "g": 0}


class RegExp:
    """Pattern plus JS-style flag letters"""

    def __init__(self, pattern: str, flags: str = ""):
        for flag in flags:
            if flag not in _FLAGS:
                raise JSTypeError(f"Invalid regular expression flags: {flags}")
        self.pattern = pattern
        self.flags = flags
        self._compiled = None

    def compile(self) -> re.Pattern:
        if self._compiled is None:
            flags = 0
            for flag in self.flags:
                flags |= _FLAGS[flag]
            self._compiled = re.compile(self.pattern, flags)
        return self._compiled

    def exec(self, string: str) -> List[str]:
        """Every non-overlapping match, in order"""
        return [m.group(0) for m in self.compile().finditer(string)]

    def __str__(self):
        inline = "".join(f for f in self.flags if _FLAGS[f])
        if inline:
            return f"(?{inline}){self.pattern}"
        return self.pattern

    def __repr__(self):
        return f"RegExp({self.pattern!r}, {self.flags!r})"


# =============================================================================
# NUMBERS
# =============================================================================

class _Number:
    MAX_VALUE = 1.7976931348623157e308


Number = _Number()

Infinity = math.inf
NaN = math.nan


_FLOAT_SYNTAX = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)
_INT_SYNTAX = re.compile(r"[+-]?[0-9A-Za-z]+", re.ASCII)
_INT_SYNTAX_PREFIXED = re.compile(r"[+-]?[0-9A-Za-z_]+", re.ASCII)
_LEGACY_OCTAL = re.compile(r"([+-]?)0([0-7_]+)", re.ASCII)
_RADIX_PREFIX = {2: re.compile(r"[+-]?0[bB]"), 8: re.compile(r"[+-]?0[oO]"), 16: re.compile(r"[+-]?0[xX]")}


def is_nan(x: float) -> bool:
    return math.isnan(x)


def parse_float(string: str) -> float:
    """Float value of string, NaN when it does not parse"""
    if not isinstance(string, str) or not _FLOAT_SYNTAX.fullmatch(string):
        return NaN
    value = float(string)
    # out of range is a parse error, not infinity
    if math.isinf(value) and "inf" not in string.lower():
        return NaN
    return value


def _parse_int_radix(string: str, radix: int) -> float:
    try:
        radix = int(radix)
    except (ValueError, TypeError):
        return NaN
    # underscores and 0x/0o/0b prefixes only when the radix comes from the prefix
    syntax = _INT_SYNTAX_PREFIXED if radix == 0 else _INT_SYNTAX
    if not isinstance(string, str) or not syntax.fullmatch(string):
        return NaN
    prefix = _RADIX_PREFIX.get(radix)
    if prefix is not None and prefix.match(string):
        return NaN
    if radix == 0:
        # a bare leading zero means octal
        match = _LEGACY_OCTAL.fullmatch(string)
        if match:
            string = f"{match.group(1)}0o{match.group(2)}"
    try:
        return float(int(string, radix))
    except ValueError:
        return NaN


def _parse_int_decimal(string: str) -> float:
    return parse_int(string, 10)


parse_int = MultiArityFn("parse_int", {
    1: _parse_int_decimal,
    2: _parse_int_radix,
})


# =============================================================================
# CONSOLE
# =============================================================================

class Console:
    def log(self, *values: Any) -> None:
        get_adapter().stdout(render(*values))
        return None


console = Console()


# =============================================================================
# STRINGS
# =============================================================================

class StringConstructor:
    @staticmethod
    def from_char_code(*codes: int) -> str:
        return "".join(chr(int(code)) for code in codes)


String = StringConstructor()


class JSString(str):
    """str with the JS String methods the runtime relies on"""

    def replace(self, re_: RegExp, fn: Callable[[str], str]) -> str:  # type: ignore[override]
        return re_.compile().sub(lambda m: fn(m.group(0)), self)

    def search(self, re_: RegExp) -> int:
        match = re_.compile().search(self)
        if match is None:
            return -1
        return match.start()

    def char_at(self, index: int) -> str:
        return self[int(index)]

    def char_code_at(self, index: int) -> int:
        return ord(self[int(index)])
