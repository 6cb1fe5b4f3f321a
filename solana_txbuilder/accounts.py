"""Account collection, deduplication and canonical ordering"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from loguru import logger

from .constants import MAX_ACCOUNT_KEYS
from .errors import TooManyAccountKeysError, TooManySignersError
from .instruction import Instruction
from .keys import Pubkey
from .message import MessageHeader


@dataclass
class ResolvedAccount:
    """One unique account with privileges merged across all instructions"""
    pubkey: Pubkey
    is_signer: bool
    is_writable: bool


def resolve_accounts(fee_payer: Pubkey, instructions: Iterable[Instruction]) -> List[ResolvedAccount]:
    """
    Collect every account referenced by the instructions, in first-seen order

    The fee payer comes first as a writable signer. Each instruction adds its
    program id as a read-only non-signer, then its accounts. An account seen
    again keeps its position and has its flags OR-ed in, so privileges only
    ever escalate.
    """
    resolved: List[ResolvedAccount] = []
    by_key: Dict[Pubkey, ResolvedAccount] = {}

    def add(pubkey: Pubkey, is_signer: bool, is_writable: bool):
        entry = by_key.get(pubkey)
        if entry is None:
            entry = ResolvedAccount(pubkey, is_signer, is_writable)
            by_key[pubkey] = entry
            resolved.append(entry)
        else:
            entry.is_signer = entry.is_signer or is_signer
            entry.is_writable = entry.is_writable or is_writable

    add(fee_payer, True, True)
    for instruction in instructions:
        add(instruction.program_id, False, False)
        for meta in instruction.accounts:
            add(meta.pubkey, meta.is_signer, meta.is_writable)

    return resolved


def order_accounts(resolved: Iterable[ResolvedAccount]) -> Tuple[List[Pubkey], MessageHeader]:
    """
    Sort resolved accounts into message order and compute the header

    Order: writable signers, read-only signers, writable non-signers,
    read-only non-signers. Each bucket keeps first-seen order, so the fee
    payer stays at index 0.

    Raises:
        TooManyAccountKeysError: if more than 256 accounts remain
    """
    writable_signers: List[Pubkey] = []
    readonly_signers: List[Pubkey] = []
    writable_non_signers: List[Pubkey] = []
    readonly_non_signers: List[Pubkey] = []

    for entry in resolved:
        if entry.is_signer:
            bucket = writable_signers if entry.is_writable else readonly_signers
        else:
            bucket = writable_non_signers if entry.is_writable else readonly_non_signers
        bucket.append(entry.pubkey)

    account_keys = writable_signers + readonly_signers + writable_non_signers + readonly_non_signers
    if len(account_keys) > MAX_ACCOUNT_KEYS:
        raise TooManyAccountKeysError(len(account_keys), MAX_ACCOUNT_KEYS)
    num_signers = len(writable_signers) + len(readonly_signers)
    if num_signers > 0xff:
        raise TooManySignersError(num_signers)

    header = MessageHeader(
        num_required_signatures=num_signers,
        num_readonly_signed_accounts=len(readonly_signers),
        num_readonly_unsigned_accounts=len(readonly_non_signers),
    )
    logger.debug(
        f'Ordered {len(account_keys)} accounts: '
        f'{len(writable_signers)} writable signers, {len(readonly_signers)} readonly signers, '
        f'{len(writable_non_signers)} writable, {len(readonly_non_signers)} readonly'
    )
    return account_keys, header
