import enum


class DroneStatus(str, enum.Enum):
    AVAILABLE = "available"
    IN_MISSION = "in-mission"
    CHARGING = "charging"
    MAINTENANCE = "maintenance"


class DroneAction(str, enum.Enum):
    DEPLOY = "deploy"
    PAUSE = "pause"
    STOP = "stop"
    CHARGE = "charge"
    MAINTENANCE = "maintenance"


class MissionStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    PAUSED = "paused"
    ABORTED = "aborted"


class MissionAction(str, enum.Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    ABORT = "abort"


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SurveyStatus(str, enum.Enum):
    COMPLETED = "completed"
    PROCESSING = "processing"
    FAILED = "failed"


class PatternType(str, enum.Enum):
    GRID = "grid"
    CROSSHATCH = "crosshatch"
    PERIMETER = "perimeter"
    SPIRAL = "spiral"


class WaypointAction(str, enum.Enum):
    PHOTO = "photo"
    VIDEO = "video"
    HOVER = "hover"
    SCAN = "scan"
