from __future__ import annotations

import pytest

from qc_radial.chart.ticks import precision_prefix, tick_format, tick_step, ticks


def test_ticks_pick_nice_steps() -> None:
    assert ticks(0, 1300, 5) == [0.0, 200.0, 400.0, 600.0, 800.0, 1000.0, 1200.0]
    assert ticks(0, 10, 5) == [0.0, 2.0, 4.0, 6.0, 8.0, 10.0]
    assert ticks(0, 1, 5) == pytest.approx([0.0, 0.2, 0.4, 0.6, 0.8, 1.0])


def test_ticks_degenerate_domains() -> None:
    assert ticks(0, 0, 5) == [0.0]
    assert ticks(0, 10, 0) == []
    assert ticks(10, 0, 5) == [10.0, 8.0, 6.0, 4.0, 2.0, 0.0]


def test_tick_step_and_prefix_precision() -> None:
    assert tick_step(0, 1300, 5) == 200
    assert precision_prefix(200, 1300) == 1
    assert precision_prefix(2, 10) == 0


def test_tick_format_uses_si_prefix_of_domain_max() -> None:
    fmt = tick_format(0, 1300, 5)
    assert [fmt(value) for value in ticks(0, 1300, 5)[1:]] == [
        "0.2k",
        "0.4k",
        "0.6k",
        "0.8k",
        "1.0k",
        "1.2k",
    ]
    assert tick_format(0, 10, 5)(4) == "4"
    assert tick_format(0, 2_500_000, 5)(1_000_000) == "1.0M"
    assert tick_format(0, 0, 5)(0) == "0"
