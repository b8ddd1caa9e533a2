"""Course handicap from a handicap index (World Handicap System formula)."""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence, Union

from models import Course

STANDARD_SLOPE = 113


def to_decimal(value: Union[float, int, Decimal]) -> Decimal:
    """Exact decimal for a handicap as it was entered (12.3 stays 12.3)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(repr(value))


def round_half_up(value: Union[float, int, Decimal]) -> int:
    """Round to the nearest integer with .5 going away from zero.

    Goes through the decimal repr so that 0.5, 2.5, 12.5 round up reliably
    instead of following float banker's rounding.
    """
    if not isinstance(value, Decimal) and not math.isfinite(value):
        return 0
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def rounded_difference(value: Union[float, int], baseline: Union[float, int]) -> int:
    """round_half_up(value - baseline) computed without float subtraction error.

    Half-stroke differences stay exactly .5 instead of landing a hair under it.
    """
    return round_half_up(to_decimal(value) - to_decimal(baseline))


def calculate_course_handicap(
    handicap_index: float, slope_rating: float, course_rating: float, par: int
) -> int:
    """Handicap Index x (Slope / 113) + (Course Rating - Par), rounded half up."""
    return round_half_up(handicap_index * (slope_rating / STANDARD_SLOPE) + (course_rating - par))


def calculate_course_handicap_9(
    handicap_index: float, slope_rating: float, course_rating: float, par: int
) -> int:
    """9-hole course handicap from 18-hole ratings: half the 18-hole value."""
    full = handicap_index * (slope_rating / STANDARD_SLOPE) + (course_rating - par)
    return round_half_up(full / 2)


def course_handicap_for_round(
    handicap_index: Optional[float],
    course: Optional[Course],
    hole_numbers: Sequence[int],
    tee_name: Optional[str] = None,
    tee_gender: Optional[str] = None,
) -> Optional[int]:
    """Course handicap for the holes actually being played.

    Ratings come from the participant's tee set, then the course, then
    par/113 defaults. Nine-hole rounds use the tee's front/back rating and
    slope when the card has them, otherwise half the 18-hole rating.
    """
    if handicap_index is None or not math.isfinite(handicap_index) or course is None:
        return None

    holes: List[int] = list(hole_numbers)
    tee = course.get_tee_set(tee_name, tee_gender)
    base_rating = (tee.rating if tee and tee.rating is not None else None) or course.rating or course.par
    base_slope = (tee.slope if tee and tee.slope is not None else None) or course.slope or STANDARD_SLOPE

    is_nine = 0 < len(holes) <= 9 and all(1 <= h <= 18 for h in holes)
    is_front = is_nine and all(h <= 9 for h in holes)
    is_back = is_nine and all(h >= 10 for h in holes)

    rating = base_rating
    slope = base_slope
    if is_nine:
        rating = base_rating / 2
        if is_front and tee and tee.front_rating is not None:
            rating = tee.front_rating
        elif is_back and tee and tee.back_rating is not None:
            rating = tee.back_rating
        if is_front and tee and tee.front_slope is not None:
            slope = tee.front_slope
        elif is_back and tee and tee.back_slope is not None:
            slope = tee.back_slope

    par = course.par_for_holes(holes)
    return calculate_course_handicap(handicap_index, slope, rating, par)
