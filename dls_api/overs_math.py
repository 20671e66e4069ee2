# dls_api/overs_math.py
from __future__ import annotations

from fractions import Fraction
from typing import Union

BALLS_PER_OVER = 6
MAX_OVERS = 50
MAX_BALLS = MAX_OVERS * BALLS_PER_OVER  # 300
OversLike = Union[str, int, float, Fraction]


def overs_to_balls(overs: OversLike) -> int:
    """
    Converts cricket overs notation to balls.

    Supported inputs:
    - "50", "37.3", "7.4" (string overs notation)
    - 40 (int overs)
    - Fraction(23, 3) (rational overs, must land on a whole ball)
    - 7.4 (float) -> treated as "7.4" (NOTE: float precision issues possible; strings preferred)

    Rule: ".x" means x balls (0-5). Example: 7.4 = 7*6 + 4 = 46 balls.
    """
    if overs is None:
        raise ValueError("Overs cannot be None")
    if isinstance(overs, bool):
        raise ValueError(f"Invalid overs: {overs!r}")

    if isinstance(overs, Fraction):
        balls = overs * BALLS_PER_OVER
        if balls.denominator != 1 or balls < 0:
            raise ValueError(f"Invalid overs: {overs} (must be a non-negative whole number of balls)")
        return int(balls)

    s = str(overs).strip()
    if not s:
        raise ValueError("Overs cannot be empty")

    # Allow plain integer overs "20"
    if "." not in s:
        try:
            ov_i = int(s)
        except ValueError:
            raise ValueError(f"Invalid overs: {overs}") from None
        if ov_i < 0:
            raise ValueError(f"Invalid overs: {overs}")
        return ov_i * BALLS_PER_OVER

    ov_part, ball_part = s.split(".", 1)
    ball_part = ball_part.strip()
    try:
        ov_i = int(ov_part) if ov_part else 0
        balls_i = int(ball_part) if ball_part else 0
    except ValueError:
        raise ValueError(f"Invalid overs format: {overs} (expected <overs>.<balls>)") from None

    if ov_i < 0 or ov_part.strip().startswith("-"):
        raise ValueError(f"Invalid overs: {overs}")
    if balls_i < 0 or balls_i >= BALLS_PER_OVER:
        raise ValueError(f"Invalid overs format: {overs} (balls part must be 0-5)")

    return ov_i * BALLS_PER_OVER + balls_i


def balls_to_overs(balls: int) -> Fraction:
    """Exact rational overs, e.g. 46 balls -> 23/3."""
    return Fraction(balls, BALLS_PER_OVER)


def balls_to_overs_str(balls: int) -> str:
    # balls=46 => "7.4"
    if balls <= 0:
        return "0.0"
    o = balls // BALLS_PER_OVER
    b = balls % BALLS_PER_OVER
    return f"{o}.{b}"


def whole_overs(balls: int) -> int:
    """Completed overs only, the partial over is dropped."""
    if balls <= 0:
        return 0
    return balls // BALLS_PER_OVER
