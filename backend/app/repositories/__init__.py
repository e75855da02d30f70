from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.repositories.courses import CourseRepository
from app.repositories.enrollments import EnrollmentRepository
from app.repositories.exams import ExamRepository
from app.repositories.learning_preferences import LearningPreferenceRepository
from app.repositories.learning_recommendations import LearningRecommendationRepository
from app.repositories.rooms import RoomRepository
from app.repositories.study_resources import StudyResourceRepository
from app.repositories.users import UserRepository


@dataclass
class Repositories:
    users: UserRepository
    courses: CourseRepository
    rooms: RoomRepository
    exams: ExamRepository
    enrollments: EnrollmentRepository
    study_resources: StudyResourceRepository
    preferences: LearningPreferenceRepository
    recommendations: LearningRecommendationRepository

    @classmethod
    def for_session(cls, db: Session) -> "Repositories":
        return cls(
            users=UserRepository(db),
            courses=CourseRepository(db),
            rooms=RoomRepository(db),
            exams=ExamRepository(db),
            enrollments=EnrollmentRepository(db),
            study_resources=StudyResourceRepository(db),
            preferences=LearningPreferenceRepository(db),
            recommendations=LearningRecommendationRepository(db),
        )
