from typing import List

from fastapi import APIRouter, Depends, status

from survey_fleet.dependencies import get_patterns
from survey_fleet.repositories.reports import MissionPatternRepository
from survey_fleet.schemas.report import MissionPattern, MissionPatternCreate

router = APIRouter(tags=["patterns"])


@router.get("/patterns", response_model=List[MissionPattern])
async def list_patterns(patterns: MissionPatternRepository = Depends(get_patterns)):
    return await patterns.get_all()


@router.post("/patterns", response_model=MissionPattern, status_code=status.HTTP_201_CREATED)
async def create_pattern(
    pattern: MissionPatternCreate,
    patterns: MissionPatternRepository = Depends(get_patterns),
):
    pattern_id = await patterns.add(pattern)
    return await patterns.get_by_id(pattern_id)
