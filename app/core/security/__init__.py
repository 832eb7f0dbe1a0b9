from .password import check_password, hash_password
from .tokens import TokenPurpose, create_token, decode_token

__all__ = ["check_password", "hash_password", "TokenPurpose", "create_token", "decode_token"]
