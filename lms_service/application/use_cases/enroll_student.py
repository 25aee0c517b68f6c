from ...domain.entities import Student
from ...domain.errors import NotFound, ValidationConflict
from .register_student import IStudentRepository

class EnrollStudent:
    def __init__(self, repo: IStudentRepository):
        self.repo = repo

    def execute(self, student_id: str, course_id: str) -> Student:
        student = self.repo.get_by_id(student_id)
        if not student:
            raise NotFound("Student not found")
        if not self.repo.course_exists(course_id):
            raise NotFound("Course not found")
        if self.repo.is_enrolled(student_id, course_id):
            raise ValidationConflict("Already enrolled in this course")
        # повторная проверка выполняется уникальным индексом при commit
        self.repo.add_enrollment(student_id, course_id)
        return student
