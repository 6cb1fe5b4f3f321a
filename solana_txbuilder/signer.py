"""Transaction signers and signing utilities"""

from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, Union

import base58
from nacl.signing import SigningKey

from .keys import Blockhash, Pubkey, Signature

if TYPE_CHECKING:
    from .message import Message
    from .transaction import Transaction


KEYPAIR_LENGTH = 64
SECRET_KEY_LENGTH = 32


class Signer(Protocol):
    """
    Anything that can sign a transaction message

    A signer is bound to one public key. sign() receives the serialized
    message bytes and returns a 64-byte signature.
    """

    def pubkey(self) -> Pubkey:
        """Public key this signer signs for"""
        ...

    def sign(self, message: bytes) -> Signature:
        """Sign serialized message bytes"""
        ...

    def is_interactive(self) -> bool:
        """Whether signing needs user interaction, e.g. a hardware wallet"""
        ...


class Keypair:
    """Ed25519 keypair held in memory"""

    def __init__(self, signing_key: Optional[SigningKey] = None):
        self._signing_key = signing_key or SigningKey.generate()
        self._pubkey = Pubkey(bytes(self._signing_key.verify_key))

    @classmethod
    def generate(cls) -> 'Keypair':
        return cls(SigningKey.generate())

    @classmethod
    def from_seed(cls, seed: bytes) -> 'Keypair':
        """Create keypair from a 32-byte secret seed"""
        if len(seed) != SECRET_KEY_LENGTH:
            raise ValueError(f'Seed must be {SECRET_KEY_LENGTH} bytes, got {len(seed)}')
        return cls(SigningKey(bytes(seed)))

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Keypair':
        """Create keypair from 64 bytes: secret seed then public key"""
        if len(data) != KEYPAIR_LENGTH:
            raise ValueError(f'Keypair must be {KEYPAIR_LENGTH} bytes, got {len(data)}')
        keypair = cls.from_seed(data[:SECRET_KEY_LENGTH])
        if keypair.pubkey().raw != bytes(data[SECRET_KEY_LENGTH:]):
            raise ValueError('Keypair public key does not match secret seed')
        return keypair

    @classmethod
    def from_base58(cls, value: str) -> 'Keypair':
        return cls.from_bytes(base58.b58decode(value))

    def seed(self) -> bytes:
        return bytes(self._signing_key)

    def to_bytes(self) -> bytes:
        return self.seed() + self._pubkey.raw

    def to_base58(self) -> str:
        return base58.b58encode(self.to_bytes()).decode('ascii')

    def pubkey(self) -> Pubkey:
        return self._pubkey

    def sign(self, message: bytes) -> Signature:
        return Signature(self._signing_key.sign(bytes(message)).signature)

    def is_interactive(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f'Keypair({self._pubkey})'


class Presigner:
    """Signer holding a signature computed elsewhere; the message is ignored"""

    def __init__(self, pubkey: Pubkey, signature: Signature):
        self._pubkey = pubkey
        self._signature = signature

    def pubkey(self) -> Pubkey:
        return self._pubkey

    def sign(self, message: bytes) -> Signature:
        return self._signature

    def is_interactive(self) -> bool:
        return False


class NullSigner:
    """Signer that always returns the all-zero signature"""

    def __init__(self, pubkey: Pubkey):
        self._pubkey = pubkey

    def pubkey(self) -> Pubkey:
        return self._pubkey

    def sign(self, message: bytes) -> Signature:
        return Signature.default()

    def is_interactive(self) -> bool:
        return False


def partial_sign_transaction(
    tx: 'Transaction',
    signers: Sequence[Signer],
    recent_blockhash: Optional[Blockhash] = None,
) -> None:
    """Sign with a subset of the required signers; a new blockhash clears every slot"""
    tx.partial_sign(signers, recent_blockhash)


def sign_transaction(
    tx: 'Transaction',
    signers: Sequence[Signer],
    recent_blockhash: Optional[Blockhash] = None,
) -> None:
    """Sign and require every required slot to be filled"""
    tx.sign(signers, recent_blockhash)


def verify_transaction(tx: 'Transaction') -> None:
    """Cryptographically verify every required signature"""
    tx.verify()


def get_signer_positions(message: 'Message', signers: Sequence[Signer]) -> List[Optional[int]]:
    """Index of each signer among the message's required signers, or None"""
    required = message.signer_keys()
    positions: List[Optional[int]] = []
    for signer in signers:
        pubkey = signer.pubkey()
        positions.append(required.index(pubkey) if pubkey in required else None)
    return positions


def sign_message(message: Union[bytes, 'Message'], signers: Sequence[Signer]) -> List[Signature]:
    """Sign the same message bytes with each signer, in order"""
    if not isinstance(message, (bytes, bytearray)):
        message = message.serialize()
    return [signer.sign(bytes(message)) for signer in signers]
