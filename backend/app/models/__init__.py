from app.models.course import Course  # noqa: F401
from app.models.enrollment import Enrollment  # noqa: F401
from app.models.exam import Exam, ExamStatus  # noqa: F401
from app.models.learning_preference import LearningPreference  # noqa: F401
from app.models.learning_recommendation import LearningRecommendation  # noqa: F401
from app.models.room import Room  # noqa: F401
from app.models.study_resource import ResourceType, StudyResource  # noqa: F401
from app.models.user import User, UserRole  # noqa: F401
