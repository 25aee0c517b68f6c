from dataclasses import dataclass

@dataclass(frozen=True)
class Student:
    id: str | None
    username: str
