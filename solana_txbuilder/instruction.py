"""Instruction inputs for the transaction builder"""

from dataclasses import dataclass, field
from typing import List

from .keys import Pubkey


@dataclass(frozen=True)
class AccountMeta:
    """An instruction's requirement on one account"""
    pubkey: Pubkey
    is_signer: bool
    is_writable: bool

    @classmethod
    def writable(cls, pubkey: Pubkey, signer: bool = False) -> 'AccountMeta':
        return cls(pubkey=pubkey, is_signer=signer, is_writable=True)

    @classmethod
    def readonly(cls, pubkey: Pubkey, signer: bool = False) -> 'AccountMeta':
        return cls(pubkey=pubkey, is_signer=signer, is_writable=False)


@dataclass
class Instruction:
    """
    A program invocation described by addresses

    The data payload is opaque to the builder and is copied into the
    message unchanged.
    """
    program_id: Pubkey
    accounts: List[AccountMeta] = field(default_factory=list)
    data: bytes = b''
