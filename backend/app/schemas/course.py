from pydantic import Field, field_validator

from app.schemas.common import ApiModel


class CourseCreate(ApiModel):
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    department: str = Field(min_length=1, max_length=200)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        code = value.strip().upper()
        if not code:
            raise ValueError("Course code cannot be empty")
        return code


class CourseOut(ApiModel):
    id: str
    code: str
    name: str
    department: str
