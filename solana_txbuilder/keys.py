"""Fixed-size key, hash and signature values"""

import os
from dataclasses import dataclass
from typing import ClassVar, Union

import base58
from nacl.exceptions import CryptoError
from nacl.signing import VerifyKey


@dataclass(frozen=True)
class _FixedBytes:
    """Immutable byte string of a fixed length, compared byte-wise"""
    raw: bytes

    LENGTH: ClassVar[int] = 0

    def __post_init__(self):
        raw = bytes(self.raw)
        if len(raw) != self.LENGTH:
            raise ValueError(
                f'{type(self).__name__} must be {self.LENGTH} bytes, got {len(raw)}'
            )
        object.__setattr__(self, 'raw', raw)

    @classmethod
    def from_base58(cls, value: Union[str, bytes]):
        """Decode from a base58 string"""
        return cls(base58.b58decode(value))

    @classmethod
    def default(cls):
        """All-zero value"""
        return cls(bytes(cls.LENGTH))

    def to_base58(self) -> str:
        return base58.b58encode(self.raw).decode('ascii')

    def is_zero(self) -> bool:
        return self.raw == bytes(self.LENGTH)

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.to_base58()!r})'


@dataclass(frozen=True, repr=False)
class Pubkey(_FixedBytes):
    """32-byte account or program address"""
    LENGTH: ClassVar[int] = 32

    @classmethod
    def new_unique(cls) -> 'Pubkey':
        """Random key, for tests and placeholders"""
        return cls(os.urandom(cls.LENGTH))


@dataclass(frozen=True, repr=False)
class Blockhash(_FixedBytes):
    """32-byte recent blockhash used for replay protection"""
    LENGTH: ClassVar[int] = 32

    @classmethod
    def new_unique(cls) -> 'Blockhash':
        return cls(os.urandom(cls.LENGTH))


@dataclass(frozen=True, repr=False)
class Signature(_FixedBytes):
    """64-byte Ed25519 signature"""
    LENGTH: ClassVar[int] = 64

    def verify(self, message: bytes, pubkey: Pubkey) -> bool:
        """Check this signature over message against pubkey"""
        try:
            VerifyKey(pubkey.raw).verify(message, self.raw)
        except CryptoError:
            return False
        return True
