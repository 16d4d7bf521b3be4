from admin_api.domain.services import IPasswordHasher
from admin_api.common.config import Config
import bcrypt


class BCryptHasher(IPasswordHasher):
    def __init__(self, rounds: int = Config.BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
