from datetime import datetime
from typing import Any
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# На проводе camelCase (contentUrl, studentId, ...), в коде snake_case
class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        # числа в строковых полях принимаем как строки (lesson id 1 -> "1")
        coerce_numbers_to_str = True

# --- Курсы

class LessonIn(CamelModel):
    title: str | None = None
    type: str | None = None
    content_url: str | None = None

class LessonOut(CamelModel):
    title: str | None = None
    type: str | None = None
    content_url: str | None = None

class CourseCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    lessons: list[LessonIn] = Field(default_factory=list)

class CourseOut(CamelModel):
    id: str
    title: str | None = None
    description: str | None = None
    lessons: list[LessonOut] = Field(default_factory=list)

# --- Студенты

class RegisterReq(CamelModel):
    username: str
    password: str

class LoginReq(CamelModel):
    username: str
    password: str

class LoginResp(CamelModel):
    message: str = "Login successful"
    student_id: str
    username: str

class EnrollReq(CamelModel):
    student_id: str
    course_id: str

class MessageResp(CamelModel):
    message: str

# --- Прогресс

class ProgressSave(CamelModel):
    student_id: str
    course_id: str
    completed_lessons: list[str] = Field(default_factory=list)
    quiz_results: list[Any] = Field(default_factory=list)
    completion_percentage: float | None = 0

class ProgressOut(CamelModel):
    id: int | None = None
    student_id: str
    course_id: str
    completed_lessons: list[str] = Field(default_factory=list)
    quiz_results: list[Any] = Field(default_factory=list)
    completion_percentage: float | None = 0
    updated_at: datetime | None = None
