"""Transaction builder and utilities"""

import base64
import hashlib
from typing import List, Optional, Sequence

from loguru import logger

from .accounts import order_accounts, resolve_accounts
from .constants import get_program_name
from .errors import (
    MissingSignerError,
    NoFeePayerError,
    NoInstructionsError,
    NoRecentBlockhashError,
    NotEnoughSignersError,
    SignatureVerificationFailedError,
)
from .instruction import Instruction
from .keys import Blockhash, Pubkey, Signature
from .message import Message, compile_instructions
from .shortvec import ByteReader, encode_length
from .signer import Signer


class Transaction:
    """
    A message plus its signature slots

    ``signatures`` is None until the first signing call, then holds one
    slot per required signer in account-key order. An all-zero slot means
    "not signed yet".
    """

    def __init__(self, message: Message, signatures: Optional[List[Signature]] = None):
        self.message = message
        self.signatures = list(signatures) if signatures is not None else None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.message == other.message and self.signatures == other.signatures

    def __repr__(self) -> str:
        return f'Transaction(signature={self.signature}, message={self.message!r})'

    @property
    def signature(self) -> Optional[Signature]:
        """First signature, which identifies the transaction on the network"""
        if not self.signatures:
            return None
        return self.signatures[0]

    def message_data(self) -> bytes:
        return self.message.serialize()

    def hash(self) -> bytes:
        """Compute transaction hash"""
        return hashlib.sha256(self.serialize()).digest()

    def serialize(self) -> bytes:
        """Serialize transaction to bytes"""
        parts = []
        signatures = self.signatures or []

        # Serialize signatures count
        parts.append(encode_length(len(signatures)))

        # Serialize signatures
        for sig in signatures:
            parts.append(sig.raw)

        # Serialize message
        parts.append(self.message.serialize())

        return b''.join(parts)

    @classmethod
    def deserialize(cls, data: bytes) -> 'Transaction':
        """Parse a serialized transaction"""
        reader = ByteReader(data)
        num_signatures = reader.read_length()
        signatures = [Signature(reader.read(Signature.LENGTH)) for _ in range(num_signatures)]
        message = Message.read_from(reader)
        reader.expect_end()
        # an unsigned transaction serializes with zero signatures
        return cls(message, signatures if num_signatures else None)

    def to_base64(self) -> str:
        return base64.b64encode(self.serialize()).decode('ascii')

    @classmethod
    def from_base64(cls, data: str) -> 'Transaction':
        return cls.deserialize(base64.b64decode(data))

    def partial_sign(self, signers: Sequence[Signer], recent_blockhash: Optional[Blockhash] = None):
        """
        Sign with any subset of the required signers

        Signers whose key is not a required signer are skipped. If
        recent_blockhash differs from the message's, it replaces it and all
        existing signatures are reset, since they covered the old message.
        """
        num_required = self.message.header.num_required_signatures

        if recent_blockhash is not None and recent_blockhash != self.message.recent_blockhash:
            logger.debug(f'Blockhash changed to {recent_blockhash}, clearing signatures')
            self.message.recent_blockhash = recent_blockhash
            if self.signatures is not None:
                self.signatures = [Signature.default() for _ in self.signatures]

        if self.signatures is None:
            self.signatures = [Signature.default() for _ in range(num_required)]
        elif len(self.signatures) < num_required:
            self.signatures.extend(
                Signature.default() for _ in range(num_required - len(self.signatures))
            )

        message_bytes = self.message.serialize()
        required = self.message.signer_keys()

        for signer in signers:
            pubkey = signer.pubkey()
            if pubkey not in required:
                logger.debug(f'Skipping {pubkey}: not a required signer')
                continue
            index = required.index(pubkey)
            self.signatures[index] = signer.sign(message_bytes)
            logger.debug(f'Signed slot {index} for {pubkey}')

    def sign(self, signers: Sequence[Signer], recent_blockhash: Optional[Blockhash] = None):
        """
        Sign and require every required signature to be present afterwards

        Raises:
            MissingSignerError: a required signer was not supplied and its
                slot is still empty
            NotEnoughSignersError: slots are empty although their signers
                were supplied
        """
        self.partial_sign(signers, recent_blockhash)

        if self.is_signed():
            return

        missing = self.missing_signers()

        supplied = {signer.pubkey() for signer in signers}
        never_supplied = [pubkey for pubkey in missing if pubkey not in supplied]
        if never_supplied:
            raise MissingSignerError(never_supplied)
        raise NotEnoughSignersError(missing)

    def missing_signers(self) -> List[Pubkey]:
        """Required signers whose slot is absent or all zeros"""
        required = self.message.signer_keys()
        signatures = self.signatures or []
        missing = []
        for i in range(self.message.header.num_required_signatures):
            if i >= len(required):
                break
            if i >= len(signatures) or signatures[i].is_zero():
                missing.append(required[i])
        return missing

    def is_signed(self) -> bool:
        """
        Check that every required signature slot is filled

        This is a presence check only: a slot holding arbitrary non-zero bytes
        counts as signed. Use verify() to check the signatures themselves.
        """
        num_required = self.message.header.num_required_signatures
        if self.signatures is None or len(self.signatures) < num_required:
            return False
        # a header claiming more signers than keys can never be fully signed
        if len(self.message.signer_keys()) < num_required:
            return False
        return not self.missing_signers()

    def verify(self):
        """
        Cryptographically verify every required signature

        Raises:
            NotEnoughSignersError: fewer signature slots or signer keys than
                required signers
            MissingSignerError: a required slot is still all zeros
            SignatureVerificationFailedError: a signature does not verify
                against its account key and the current message
        """
        num_required = self.message.header.num_required_signatures
        if self.signatures is None or len(self.signatures) < num_required:
            raise NotEnoughSignersError(self.missing_signers())

        signer_keys = self.message.signer_keys()
        for i in range(num_required):
            if i >= len(signer_keys):
                raise NotEnoughSignersError(
                    message=f'Header requires {num_required} signers but only {len(signer_keys)} account keys exist'
                )
            if self.signatures[i].is_zero():
                raise MissingSignerError([signer_keys[i]])

        message_bytes = self.message.serialize()
        for i in range(num_required):
            if not self.signatures[i].verify(message_bytes, signer_keys[i]):
                raise SignatureVerificationFailedError(i, signer_keys[i])

    def verify_and_hash_message(self) -> Blockhash:
        """Verify all signatures, then return the message hash"""
        self.verify()
        return self.message.hash()

    def data(self, instruction_index: int) -> Optional[bytes]:
        """Data of the instruction at instruction_index"""
        if instruction_index >= len(self.message.instructions):
            return None
        return self.message.instructions[instruction_index].data

    def key(self, instruction_index: int, accounts_index: int) -> Optional[Pubkey]:
        """Account key referenced by an instruction's account position"""
        if instruction_index >= len(self.message.instructions):
            return None
        accounts = self.message.instructions[instruction_index].accounts
        if accounts_index >= len(accounts):
            return None
        key_index = accounts[accounts_index]
        if key_index >= len(self.message.account_keys):
            return None
        return self.message.account_keys[key_index]

    def signer_key(self, instruction_index: int, accounts_index: int) -> Optional[Pubkey]:
        """Like key(), but only if that account is a signer"""
        if instruction_index >= len(self.message.instructions):
            return None
        accounts = self.message.instructions[instruction_index].accounts
        if accounts_index >= len(accounts):
            return None
        if not self.message.is_signer(accounts[accounts_index]):
            return None
        return self.key(instruction_index, accounts_index)


class TransactionBuilder:
    """
    Builder for constructing transactions

    Collects instructions, then on build() deduplicates and orders their
    accounts, builds the message header and compiles instructions into
    index form. Every build() works from scratch, so the builder can be
    reused or built twice with identical results.
    """

    def __init__(self):
        self.instructions: List[Instruction] = []
        self.fee_payer: Optional[Pubkey] = None
        self.recent_blockhash: Optional[Blockhash] = None

    def set_fee_payer(self, fee_payer: Pubkey) -> 'TransactionBuilder':
        """Set the fee payer, which becomes the first signer"""
        self.fee_payer = fee_payer
        return self

    def set_recent_blockhash(self, blockhash: Blockhash) -> 'TransactionBuilder':
        """Set recent blockhash"""
        self.recent_blockhash = blockhash
        return self

    def add_instruction(self, instruction: Instruction) -> 'TransactionBuilder':
        """Add an instruction"""
        self.instructions.append(instruction)
        return self

    def add_instructions(self, instructions: Sequence[Instruction]) -> 'TransactionBuilder':
        """Add instructions, executed in the order given"""
        self.instructions.extend(instructions)
        return self

    def build(self) -> Transaction:
        """
        Build an unsigned transaction

        Raises:
            NoFeePayerError, NoRecentBlockhashError, NoInstructionsError:
                a required input is missing
            TooManyAccountKeysError: more than 256 unique accounts
        """
        if self.fee_payer is None:
            raise NoFeePayerError()
        if self.recent_blockhash is None:
            raise NoRecentBlockhashError()
        if not self.instructions:
            raise NoInstructionsError()

        instructions = [
            Instruction(ix.program_id, list(ix.accounts), bytes(ix.data))
            for ix in self.instructions
        ]
        resolved = resolve_accounts(self.fee_payer, instructions)
        account_keys, header = order_accounts(resolved)

        message = Message(
            header=header,
            account_keys=account_keys,
            recent_blockhash=self.recent_blockhash,
            instructions=compile_instructions(instructions, account_keys),
        )
        logger.debug(
            f'Built message: {len(instructions)} instructions '
            f'({", ".join(get_program_name(p) for p in message.program_ids())}), '
            f'{len(account_keys)} accounts, {header.num_required_signatures} required signatures'
        )
        return Transaction(message)

    def build_signed(self, signers: Sequence[Signer]) -> Transaction:
        """
        Build, sign with all required signers, and verify

        Raises:
            MissingSignerError, NotEnoughSignersError: signers incomplete
            SignatureVerificationFailedError: a signer produced an invalid
                signature
        """
        tx = self.build()
        tx.sign(signers)
        tx.verify()
        return tx
