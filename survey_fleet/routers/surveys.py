from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from survey_fleet.dependencies import get_surveys
from survey_fleet.repositories.reports import SurveyRepository
from survey_fleet.schemas.report import SurveyReport, SurveyReportCreate

router = APIRouter(tags=["surveys"])

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


@router.get("/surveys", response_model=List[SurveyReport])
async def list_surveys(
    start_date: Optional[str] = Query(None, alias="startDate", pattern=DATE_PATTERN),
    end_date: Optional[str] = Query(None, alias="endDate", pattern=DATE_PATTERN),
    mission_id: Optional[str] = Query(None, alias="missionId"),
    surveys: SurveyRepository = Depends(get_surveys),
):
    if mission_id:
        report = await surveys.get_by_mission(mission_id)
        return [report] if report else []
    if start_date or end_date:
        return await surveys.get_by_date_range(start_date or "0000-01-01", end_date or "9999-12-31")
    return await surveys.get_all()


@router.post("/surveys", response_model=SurveyReport, status_code=status.HTTP_201_CREATED)
async def create_survey(report: SurveyReportCreate, surveys: SurveyRepository = Depends(get_surveys)):
    report_id = await surveys.add(report)
    return await get_survey(report_id, surveys)


@router.get("/surveys/{report_id}", response_model=SurveyReport)
async def get_survey(report_id: str, surveys: SurveyRepository = Depends(get_surveys)):
    report = await surveys.get_by_id(report_id)
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Survey report not found"
        )
    return report
