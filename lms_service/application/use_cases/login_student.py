from ...domain.entities import Student
from ...domain.errors import AuthenticationFailure
from .register_student import IStudentRepository, IPasswordHasher

class LoginStudent:
    def __init__(self, repo: IStudentRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, username: str, password: str) -> Student:
        found = self.repo.get_password_hash(username)
        # одинаковый ответ для неизвестного логина и неверного пароля
        if not found or not self.hasher.verify(password, found[1]):
            raise AuthenticationFailure("Invalid username or password")
        return found[0]
