from .expense import ExpenseService
from .mailer import Mailer
from .room import RoomService
from .user import UserService

__all__ = ["ExpenseService", "Mailer", "RoomService", "UserService"]
