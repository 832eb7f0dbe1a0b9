from .ledger import LedgerRepository
from .room import RoomRepository
from .user import UserRepository

__all__ = ["LedgerRepository", "RoomRepository", "UserRepository"]
