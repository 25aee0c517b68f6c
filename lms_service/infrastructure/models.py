# lms_service/infrastructure/models.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    TIMESTAMP,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CourseORM(Base):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        default=utcnow,
    )

    lessons: Mapped[list["LessonORM"]] = relationship(
        "LessonORM",
        back_populates="course",
        order_by="LessonORM.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"CourseORM(id={self.id!r}, title={self.title!r})"


class LessonORM(Base):
    __tablename__ = "lessons"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    course_id: Mapped[str] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # порядок уроков внутри курса в том виде, в каком его прислал клиент
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str | None] = mapped_column(Text, nullable=True)  # video, pdf, quiz, ...
    content_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    course: Mapped["CourseORM"] = relationship(
        "CourseORM",
        back_populates="lessons",
    )

    def __repr__(self) -> str:
        return f"LessonORM(id={self.id!r}, course_id={self.course_id!r}, title={self.title!r})"


class StudentORM(Base):
    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)


class EnrollmentORM(Base):
    __tablename__ = "enrollments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[str] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id: Mapped[str] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        default=utcnow,
    )
    __table_args__ = (UniqueConstraint("student_id", "course_id", name="uq_student_course"),)


class ProgressORM(Base):
    __tablename__ = "progress"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # studentId/courseId хранятся как есть, без внешних ключей
    student_id: Mapped[str] = mapped_column(Text, index=True)
    course_id: Mapped[str] = mapped_column(Text)
    completed_lessons: Mapped[list] = mapped_column(JSON, default=list)
    quiz_results: Mapped[list] = mapped_column(JSON, default=list)
    completion_percentage: Mapped[float | None] = mapped_column(Float, nullable=True, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        default=utcnow,
    )
    __table_args__ = (UniqueConstraint("student_id", "course_id", name="uq_progress_student_course"),)


Course = CourseORM
Lesson = LessonORM
Student = StudentORM
Enrollment = EnrollmentORM
Progress = ProgressORM

__all__ = [
    "Base",
    "CourseORM",
    "LessonORM",
    "StudentORM",
    "EnrollmentORM",
    "ProgressORM",
    "Course",
    "Lesson",
    "Student",
    "Enrollment",
    "Progress",
]
