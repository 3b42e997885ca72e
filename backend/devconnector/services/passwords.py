"""
DevConnector Backend — Password Hashing
=========================================

What:  bcrypt hashing and verification through passlib.
How:   bcrypt is deliberately slow (tens of milliseconds at cost 10), so both
       calls run in Starlette's threadpool instead of on the event loop.
Who:   AuthService (login and registration).
"""

from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from devconnector.config import Settings


class PasswordHasher:

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(rounds=settings.bcrypt_rounds)

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self._context.hash, password)

    async def verify(self, password: str, hashed: str) -> bool:
        return await run_in_threadpool(self._context.verify, password, hashed)
