from .base import Base
from .definitions import User
from .ledger import JOINED_ROOM_DESCRIPTION, Membership, PersonalExpense, Room, RoomExpense

__all__ = ["Base", "User", "Room", "Membership", "RoomExpense", "PersonalExpense", "JOINED_ROOM_DESCRIPTION"]
