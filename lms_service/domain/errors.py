"""Ошибки предметной области.

Каждый класс знает свой HTTP-статус; перевод в ответ делает
обработчик в main.py.
"""


class LMSError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationConflict(LMSError):
    """Дубликат логина или повторная запись на курс."""
    status_code = 400


class AuthenticationFailure(LMSError):
    status_code = 401


class NotFound(LMSError):
    status_code = 404


class PersistenceFailure(LMSError):
    status_code = 500
