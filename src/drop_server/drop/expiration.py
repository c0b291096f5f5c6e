import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal

# zero timestamp, serialized as 0001-01-01T00:00:00Z
NEVER_EXPIRES = datetime(1, 1, 1, tzinfo=timezone.utc)

_UNIT_NS = {
    'ns': Decimal(1),
    'us': Decimal(1_000),
    'µs': Decimal(1_000),  # U+00B5
    'μs': Decimal(1_000),  # U+03BC
    'ms': Decimal(1_000_000),
    's': Decimal(1_000_000_000),
    'm': Decimal(60_000_000_000),
    'h': Decimal(3_600_000_000_000),
}
_PART_RE = re.compile(r'(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)')
# largest duration an int64 nanosecond count holds, about 2562047h
MAX_DURATION_NS = Decimal(2 ** 63 - 1)


def parse_duration(expr: str) -> timedelta:
    """
    Parse a duration expression such as "300ms", "-1.5h" or "2h45m".

    A sequence of decimal numbers, each with an optional fraction and a unit
    suffix, with an optional leading sign. Resolution is the microsecond.
    Raises ValueError on malformed input or when the total exceeds
    MAX_DURATION_NS.
    """
    orig = expr
    sign = 1
    if expr[:1] in ('-', '+'):
        sign = -1 if expr[0] == '-' else 1
        expr = expr[1:]
    if expr == '0':
        return timedelta(0)
    if not expr:
        raise ValueError(f'invalid duration {orig!r}')

    total_ns = Decimal(0)
    pos = 0
    while pos < len(expr):
        match = _PART_RE.match(expr, pos)
        if not match:
            raise ValueError(f'invalid duration {orig!r}')
        total_ns += Decimal(match.group(1)) * _UNIT_NS[match.group(2)]
        pos = match.end()
        if total_ns > MAX_DURATION_NS:
            raise ValueError(f'invalid duration {orig!r}: too large')

    return sign * timedelta(microseconds=int(total_ns / 1000))


def compute_end_of_life(ttl: str | None, now: datetime) -> datetime:
    if not ttl:
        return NEVER_EXPIRES
    return now + parse_duration(ttl)


def is_unset(instant: datetime) -> bool:
    return instant == NEVER_EXPIRES
