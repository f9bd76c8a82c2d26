from __future__ import annotations

import math
from collections.abc import Callable

E10 = math.sqrt(50)
E5 = math.sqrt(10)
E2 = math.sqrt(2)

SI_PREFIXES = ("y", "z", "a", "f", "p", "µ", "m", "", "k", "M", "G", "T", "P", "E", "Z", "Y")
MINUS = "−"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _tick_spec(start: float, stop: float, count: float) -> tuple[int, int, float]:
    step = (stop - start) / max(0.0, count)
    power = math.floor(math.log10(step))
    error = step / (10.0**power)
    if error >= E10:
        factor = 10
    elif error >= E5:
        factor = 5
    elif error >= E2:
        factor = 2
    else:
        factor = 1

    if power < 0:
        inc = (10.0**-power) / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = (10.0**power) * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def ticks(start: float, stop: float, count: int) -> list[float]:
    """Evenly spaced "nice" values covering [start, stop], at most about ``count`` of them."""
    if not count > 0:
        return []
    if start == stop:
        return [float(start)]
    reverse = stop < start
    low, high = (stop, start) if reverse else (start, stop)
    i1, i2, inc = _tick_spec(low, high, count)
    if i2 < i1:
        return []
    if inc < 0:
        values = [(i1 + index) / -inc for index in range(i2 - i1 + 1)]
    else:
        values = [float((i1 + index) * inc) for index in range(i2 - i1 + 1)]
    return values[::-1] if reverse else values


def tick_increment(start: float, stop: float, count: int) -> float:
    return _tick_spec(start, stop, count)[2]


def tick_step(start: float, stop: float, count: int) -> float:
    reverse = stop < start
    inc = tick_increment(stop, start, count) if reverse else tick_increment(start, stop, count)
    step = 1.0 / -inc if inc < 0 else inc
    return -step if reverse else step


def _exponent(value: float) -> int:
    return math.floor(math.log10(abs(value)))


def precision_prefix(step: float, value: float) -> int:
    prefix_exponent = max(-8, min(8, _exponent(value) // 3)) * 3
    return max(0, prefix_exponent - _exponent(step))


def format_prefix(precision: int, value: float) -> Callable[[float], str]:
    """Fixed-point formatter scaled to the SI prefix of ``value``."""
    prefix_exponent = max(-8, min(8, _exponent(value) // 3)) * 3 if value else 0
    scale = 10.0**-prefix_exponent
    prefix = SI_PREFIXES[8 + prefix_exponent // 3]

    def _format(number: float) -> str:
        scaled = number * scale
        text = f"{abs(scaled):.{precision}f}"
        sign = MINUS if scaled < 0 and float(text) != 0.0 else ""
        return f"{sign}{text}{prefix}"

    return _format


def tick_format(start: float, stop: float, count: int) -> Callable[[float], str]:
    """SI-prefixed tick labels, prefix chosen by the largest domain value."""
    value = max(abs(start), abs(stop))
    if start == stop or not count > 0:
        return format_prefix(0, value)
    step = tick_step(start, stop, count)
    return format_prefix(precision_prefix(step, value), value)
