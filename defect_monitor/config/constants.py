"""
System constants.

Defines the fixed enumerations used across the service:
- manufacturing process steps
- defect cause categories
- date windows (periods) for the list view and analytics

## Maintenance

The enumeration values are the labels stored in the `defect_records`
table and shown in the UI dropdowns. Member order is the dropdown order.

### Adding a process step or cause category

1. Add a member to `ProcessStep` / `CauseCategory`.
2. Add an Alembic migration only if the column length must grow
   (values are stored as text, no database enum type is created).
3. Restart the API service.
4. Verify with `GET /api/constants/all`.

### Notes

- Never rename or delete a value already in use; stored records keep
  the old label and would stop matching filters.
"""

from enum import Enum
from typing import Optional


class ProcessStep(str, Enum):
    """Manufacturing process steps."""
    MATERIAL_PREP = "材料準備工程"
    HEATING = "加熱工程"
    EXTRUSION = "押出成形工程"
    COOLING = "冷却工程"
    DRAW = "引取工程"
    STRAIGHTENING = "矯正工程"
    CUTTING = "切断工程"
    INSPECTION = "品質検査工程"
    SURFACE_TREATMENT = "表面処理工程"
    PACKING = "梱包工程"


class CauseCategory(str, Enum):
    """Defect root-cause categories."""
    EQUIPMENT = "設備不良"
    MATERIAL = "材料不良"
    OPERATOR = "作業ミス"
    PROCEDURE = "手順起因"
    ENVIRONMENT = "環境要因"
    MEASUREMENT_TOOL = "測定器具"
    OTHER = "その他"


class Period(str, Enum):
    """Date windows for the list view and analytics scope."""
    LAST_7_DAYS = "7d"
    LAST_14_DAYS = "14d"
    LAST_30_DAYS = "30d"
    ALL = "all"

    @property
    def days(self) -> Optional[int]:
        """Window length in days, None for all time."""
        return PERIOD_DAYS[self]

    @property
    def label(self) -> str:
        return PERIOD_LABELS[self]


PERIOD_DAYS = {
    Period.LAST_7_DAYS: 7,
    Period.LAST_14_DAYS: 14,
    Period.LAST_30_DAYS: 30,
    Period.ALL: None,
}

PERIOD_LABELS = {
    Period.LAST_7_DAYS: "過去7日間",
    Period.LAST_14_DAYS: "過去14日間",
    Period.LAST_30_DAYS: "過去30日間",
    Period.ALL: "全期間",
}

# List view and analytics both open on the last week
DEFAULT_PERIOD = Period.LAST_7_DAYS

RESPONDENT_MAX_LENGTH = 100


# ==================== Helpers ====================

def get_process_step_list() -> list[str]:
    """
    Get the process step labels in dropdown order.

    Returns:
        list[str]: process step labels
    """
    return [step.value for step in ProcessStep]


def get_cause_category_list() -> list[str]:
    """
    Get the cause category labels in dropdown order.

    Returns:
        list[str]: cause category labels
    """
    return [cause.value for cause in CauseCategory]


def get_periods_with_labels() -> list[dict]:
    """
    Get the selectable periods with display labels.

    Returns:
        list[dict]: dicts with value, label and days (None for all time)
    """
    return [
        {
            "value": period.value,
            "label": period.label,
            "days": period.days,
        }
        for period in Period
    ]
