"""Transaction message, compiled instructions and their wire encoding"""

from dataclasses import dataclass, field
import hashlib
from typing import Dict, Iterable, List, Optional

from .constants import MESSAGE_HEADER_LENGTH
from .errors import AccountNotFoundError, DecodeError, EncodingError
from .instruction import Instruction
from .keys import Blockhash, Pubkey
from .shortvec import ByteReader, encode_length


@dataclass
class MessageHeader:
    """Transaction message header"""
    num_required_signatures: int
    num_readonly_signed_accounts: int
    num_readonly_unsigned_accounts: int

    def serialize(self) -> bytes:
        values = (
            self.num_required_signatures,
            self.num_readonly_signed_accounts,
            self.num_readonly_unsigned_accounts,
        )
        if any(v < 0 or v > 0xff for v in values):
            raise EncodingError(f'Message header fields must fit in one byte: {values}')
        return bytes(values)


@dataclass
class CompiledInstruction:
    """Compiled instruction"""
    program_id_index: int
    accounts: List[int]
    data: bytes

    def program_id(self, account_keys: List[Pubkey]) -> Pubkey:
        return account_keys[self.program_id_index]

    def serialize(self) -> bytes:
        if any(i < 0 or i > 0xff for i in [self.program_id_index, *self.accounts]):
            raise EncodingError('Account indices must fit in one byte')

        parts = []
        parts.append(bytes([self.program_id_index]))
        parts.append(encode_length(len(self.accounts)))
        parts.append(bytes(self.accounts))
        parts.append(encode_length(len(self.data)))
        parts.append(self.data)
        return b''.join(parts)


@dataclass
class Message:
    """
    Legacy transaction message

    Account keys are laid out as writable signers, read-only signers,
    writable non-signers, read-only non-signers. The first
    ``num_required_signatures`` keys must each provide a signature, in the
    same order as the transaction's signature list.
    """
    header: MessageHeader
    account_keys: List[Pubkey]
    recent_blockhash: Blockhash
    instructions: List[CompiledInstruction] = field(default_factory=list)

    def serialize(self) -> bytes:
        """Serialize message to bytes"""
        parts = []

        # Header
        parts.append(self.header.serialize())

        # Account keys
        parts.append(encode_length(len(self.account_keys)))
        for key in self.account_keys:
            parts.append(key.raw)

        # Recent blockhash
        parts.append(self.recent_blockhash.raw)

        # Instructions
        parts.append(encode_length(len(self.instructions)))
        for instruction in self.instructions:
            parts.append(instruction.serialize())

        return b''.join(parts)

    def hash(self) -> Blockhash:
        """Compute message hash"""
        return self.hash_raw_message(self.serialize())

    @staticmethod
    def hash_raw_message(data: bytes) -> Blockhash:
        """SHA-256 of serialized message bytes"""
        return Blockhash(hashlib.sha256(data).digest())

    @classmethod
    def deserialize(cls, data: bytes) -> 'Message':
        """Parse a serialized message; the whole input must be consumed"""
        reader = ByteReader(data)
        message = cls.read_from(reader)
        reader.expect_end()
        return message

    @classmethod
    def read_from(cls, reader: ByteReader) -> 'Message':
        header = MessageHeader(*reader.read(MESSAGE_HEADER_LENGTH))

        num_keys = reader.read_length()
        account_keys = [Pubkey(reader.read(Pubkey.LENGTH)) for _ in range(num_keys)]

        num_signed = header.num_required_signatures
        if num_signed > num_keys:
            raise DecodeError(f'Header requires {num_signed} signers but message has {num_keys} account keys')
        if header.num_readonly_signed_accounts > num_signed:
            raise DecodeError('Read-only signed accounts exceed required signers')
        if header.num_readonly_unsigned_accounts > num_keys - num_signed:
            raise DecodeError('Read-only unsigned accounts exceed non-signer accounts')

        recent_blockhash = Blockhash(reader.read(Blockhash.LENGTH))

        instructions = []
        for _ in range(reader.read_length()):
            program_id_index = reader.read_u8()
            accounts = list(reader.read(reader.read_length()))
            ix_data = reader.read(reader.read_length())
            instructions.append(CompiledInstruction(program_id_index, accounts, ix_data))

        return cls(header, account_keys, recent_blockhash, instructions)

    def is_signer(self, index: int) -> bool:
        return index < self.header.num_required_signatures

    def is_writable(self, index: int) -> bool:
        num_signed = self.header.num_required_signatures
        if index < num_signed:
            return index < num_signed - self.header.num_readonly_signed_accounts
        num_unsigned = len(self.account_keys) - num_signed
        return index - num_signed < num_unsigned - self.header.num_readonly_unsigned_accounts

    def signer_keys(self) -> List[Pubkey]:
        return self.account_keys[:self.header.num_required_signatures]

    def program_id(self, instruction_index: int) -> Optional[Pubkey]:
        if instruction_index >= len(self.instructions):
            return None
        index = self.instructions[instruction_index].program_id_index
        if index >= len(self.account_keys):
            return None
        return self.account_keys[index]

    def program_ids(self) -> List[Pubkey]:
        """Unique program ids in instruction order"""
        result = []
        for i in range(len(self.instructions)):
            program_id = self.program_id(i)
            if program_id is not None and program_id not in result:
                result.append(program_id)
        return result

    def has_duplicates(self) -> bool:
        return len(set(self.account_keys)) != len(self.account_keys)


def compile_instructions(
    instructions: Iterable[Instruction],
    account_keys: List[Pubkey],
) -> List[CompiledInstruction]:
    """
    Rewrite instructions to reference accounts by index into account_keys

    Raises:
        AccountNotFoundError: if an instruction names a key that is not in
            account_keys. The builder always includes every referenced key,
            so this means the account list was not produced from these
            instructions.
    """
    positions: Dict[Pubkey, int] = {}
    for i, key in enumerate(account_keys):
        positions.setdefault(key, i)

    def index_of(pubkey: Pubkey) -> int:
        try:
            return positions[pubkey]
        except KeyError:
            raise AccountNotFoundError(pubkey) from None

    compiled = []
    for instruction in instructions:
        compiled.append(CompiledInstruction(
            program_id_index=index_of(instruction.program_id),
            accounts=[index_of(meta.pubkey) for meta in instruction.accounts],
            data=bytes(instruction.data),
        ))
    return compiled
