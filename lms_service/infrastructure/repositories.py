from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from .models import StudentORM, CourseORM, EnrollmentORM
from ..domain.entities import Student
from ..domain.errors import ValidationConflict
from ..application.use_cases.register_student import IStudentRepository

def to_domain(s: StudentORM) -> Student:
    return Student(id=s.id, username=s.username)

class StudentRepository(IStudentRepository):
    def __init__(self, db: Session): self.db = db

    def get_by_username(self, username: str) -> Student | None:
        row = self.db.query(StudentORM).filter(StudentORM.username == username).first()
        return to_domain(row) if row else None

    def get_password_hash(self, username: str) -> tuple[Student, str] | None:
        row = self.db.query(StudentORM).filter(StudentORM.username == username).first()
        return (to_domain(row), row.password_hash) if row else None

    def get_by_id(self, student_id: str) -> Student | None:
        row = self.db.get(StudentORM, student_id)
        return to_domain(row) if row else None

    def create(self, username: str, password_hash: str) -> Student:
        row = StudentORM(username=username, password_hash=password_hash)
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError:
            # параллельная регистрация успела раньше
            self.db.rollback()
            raise ValidationConflict("Username already exists")
        self.db.refresh(row)
        return to_domain(row)

    def course_exists(self, course_id: str) -> bool:
        return self.db.query(CourseORM.id).filter(CourseORM.id == course_id).first() is not None

    def is_enrolled(self, student_id: str, course_id: str) -> bool:
        row = (self.db.query(EnrollmentORM.id)
               .filter(EnrollmentORM.student_id == student_id,
                       EnrollmentORM.course_id == course_id)
               .first())
        return row is not None

    def add_enrollment(self, student_id: str, course_id: str) -> None:
        """Записывает студента на курс.

        Уникальный индекс (student_id, course_id) проверяется в момент commit,
        поэтому из двух одновременных запросов пройдёт только один.
        """
        self.db.add(EnrollmentORM(student_id=student_id, course_id=course_id))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationConflict("Already enrolled in this course")

    def enrolled_courses(self, student_id: str) -> list[CourseORM]:
        q = (select(CourseORM)
             .join(EnrollmentORM, EnrollmentORM.course_id == CourseORM.id)
             .where(EnrollmentORM.student_id == student_id)
             .order_by(EnrollmentORM.id))
        return list(self.db.execute(q).scalars().all())
