from app.core.models.branch import Branch
from app.core.models.class_model import DanceClass
from app.core.models.teacher import Teacher

__all__ = [
    "Branch",
    "DanceClass",
    "Teacher",
]
