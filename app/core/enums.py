from enum import Enum


class Weekday(str, Enum):
    """Studio week, Sunday first. Values are the labels stored and shown to students."""

    SUNDAY = "ראשון"
    MONDAY = "שני"
    TUESDAY = "שלישי"
    WEDNESDAY = "רביעי"
    THURSDAY = "חמישי"
    FRIDAY = "שישי"
    SATURDAY = "שבת"


class ClassLevel(str, Enum):
    BEGINNERS = "מתחילות"
    CONTINUING = "ממשיכות"
    ADVANCED = "מתקדמות"
    EARLY_CHILDHOOD = "גיל הרך"
    BASIC = "בסיס"
    TEAM = "נבחרת"


WEEKDAY_LABELS = [d.value for d in Weekday]

ADMIN_ROLE = "admin"
