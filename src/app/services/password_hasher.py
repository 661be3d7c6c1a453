import bcrypt


class PasswordHasher:
    """bcrypt password hashing with a configurable work factor"""

    _DUMMY_PASSWORD = b"dummy_password"

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            # Malformed stored hash
            return False

    def dummy_verify(self) -> None:
        """Burn one hash check so unknown emails take as long as known ones"""
        bcrypt.checkpw(self._DUMMY_PASSWORD, bcrypt.gensalt(self.rounds))
