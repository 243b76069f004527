from typing import Callable, List, Optional

from survey_fleet.repositories.base import Repository
from survey_fleet.schemas.report import FlightStats, MissionPattern, OrganizationStats, SurveyReport
from survey_fleet.store import collections
from survey_fleet.store.base import Unsubscribe

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def month_index(month: str) -> int:
    try:
        return MONTHS.index(month[:3].title())
    except ValueError:
        return len(MONTHS)


class SurveyRepository(Repository[SurveyReport]):
    collection = collections.SURVEYS
    model = SurveyReport
    id_prefix = "S"
    order_by = ("date", True)

    async def get_by_mission(self, mission_id: str) -> Optional[SurveyReport]:
        reports = await self.query(("missionId", "==", mission_id))
        return reports[0] if reports else None

    async def get_by_date_range(self, start_date: str, end_date: str) -> List[SurveyReport]:
        """Reports dated within [start_date, end_date] (YYYY-MM-DD, inclusive), newest first."""
        return await self.query(("date", ">=", start_date), ("date", "<=", end_date))


class FlightStatsRepository(Repository[FlightStats]):
    collection = collections.FLIGHT_STATS
    model = FlightStats
    id_prefix = "FS"

    async def get_all(self) -> List[FlightStats]:
        stats = await super().get_all()
        return sorted(stats, key=lambda entry: month_index(entry.month))


class OrganizationStatsRepository(Repository[OrganizationStats]):
    collection = collections.ORGANIZATION_STATS
    model = OrganizationStats
    id_prefix = "ORG"
    listen_interval = 10.0

    async def get(self) -> Optional[OrganizationStats]:
        stats = await self.get_all()
        return stats[0] if stats else None

    async def listen(self, callback: Callable[[Optional[OrganizationStats]], None]) -> Unsubscribe:
        return await super().listen(lambda stats: callback(stats[0] if stats else None))


class MissionPatternRepository(Repository[MissionPattern]):
    collection = collections.MISSION_PATTERNS
    model = MissionPattern
    id_prefix = "MP"
