DRONES = "drones"
MISSIONS = "missions"
SURVEYS = "surveys"
FLIGHT_STATS = "flightStats"
MISSION_PATTERNS = "missionPatterns"
ORGANIZATION_STATS = "organizationStats"

ALL = (DRONES, MISSIONS, SURVEYS, FLIGHT_STATS, MISSION_PATTERNS, ORGANIZATION_STATS)
