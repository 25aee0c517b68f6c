from ...domain.entities import Student
from ...domain.errors import ValidationConflict

class IStudentRepository:
    def get_by_username(self, username: str) -> Student | None: ...
    def get_password_hash(self, username: str) -> tuple[Student, str] | None: ...
    def get_by_id(self, student_id: str) -> Student | None: ...
    def create(self, username: str, password_hash: str) -> Student: ...
    def course_exists(self, course_id: str) -> bool: ...
    def is_enrolled(self, student_id: str, course_id: str) -> bool: ...
    def add_enrollment(self, student_id: str, course_id: str) -> None: ...

class IPasswordHasher:
    def hash(self, plain: str) -> str: ...
    def verify(self, plain: str, hashed: str) -> bool: ...

class RegisterStudent:
    def __init__(self, repo: IStudentRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, username: str, password: str) -> Student:
        if self.repo.get_by_username(username):
            raise ValidationConflict("Username already exists")
        pwd_hash = self.hasher.hash(password)
        return self.repo.create(username, pwd_hash)
