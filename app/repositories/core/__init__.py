# app/repositories/core/__init__.py
from .room_repository import RoomRepository
from .student_repository import StudentRepository
from .code_counter_repository import CodeCounterRepository
from .warden_repository import WardenRepository

__all__ = [
    "RoomRepository",
    "StudentRepository",
    "CodeCounterRepository",
    "WardenRepository",
]
