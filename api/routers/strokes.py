"""Stroke allocation endpoints."""

from typing import List

from fastapi import APIRouter

from api.schemas import AllocateStrokesRequest
from handicap.strokes import allocate_strokes
from models import Course, CourseHoleDifficulty, StrokeAllocation

router = APIRouter()


@router.post("/allocate", response_model=List[StrokeAllocation])
async def allocate(req: AllocateStrokesRequest):
    """Allocate strokes for a group. Holes without a stroke index use their hole number."""
    difficulty = CourseHoleDifficulty.from_course(Course(holes=req.holes))
    return allocate_strokes(req.players, difficulty, req.allocation_format)
