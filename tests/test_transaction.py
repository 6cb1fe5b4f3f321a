"""Unit tests for TransactionBuilder and Transaction encoding."""

import base64

import pytest

from solana_txbuilder import (
    AccountMeta,
    Blockhash,
    DecodeError,
    Instruction,
    MessageHeader,
    NoFeePayerError,
    NoInstructionsError,
    NoRecentBlockhashError,
    Pubkey,
    Signature,
    TooManyAccountKeysError,
    Transaction,
    TransactionBuilder,
)
from solana_txbuilder.constants import MEMO_PROGRAM_ID, SYSTEM_PROGRAM_ID


def key(n):
    return Pubkey(bytes([n] * 32))


@pytest.fixture
def builder(fee_payer, blockhash):
    return TransactionBuilder().set_fee_payer(fee_payer).set_recent_blockhash(blockhash)


class TestBuilderValidation:
    """Tests for required builder inputs."""

    def test_initial_state(self):
        """Test a fresh builder is empty."""
        builder = TransactionBuilder()
        assert builder.fee_payer is None
        assert builder.recent_blockhash is None
        assert builder.instructions == []

    def test_requires_fee_payer(self, blockhash, program_id):
        """Test build without fee payer raises NoFeePayerError."""
        builder = TransactionBuilder().set_recent_blockhash(blockhash)
        builder.add_instruction(Instruction(program_id))
        with pytest.raises(NoFeePayerError):
            builder.build()

    def test_fee_payer_checked_before_instructions(self):
        """Test a builder missing everything reports the fee payer first."""
        with pytest.raises(NoFeePayerError):
            TransactionBuilder().build()

    def test_requires_blockhash(self, fee_payer, program_id):
        """Test build without blockhash raises NoRecentBlockhashError."""
        builder = TransactionBuilder().set_fee_payer(fee_payer)
        builder.add_instruction(Instruction(program_id))
        with pytest.raises(NoRecentBlockhashError):
            builder.build()

    def test_requires_instructions(self, builder):
        """Test build without instructions raises NoInstructionsError."""
        with pytest.raises(NoInstructionsError):
            builder.build()

    def test_too_many_accounts(self, builder, program_id):
        """Test the account limit surfaces from build."""
        accounts = [AccountMeta.readonly(Pubkey.new_unique()) for _ in range(255)]
        builder.add_instruction(Instruction(program_id, accounts))
        with pytest.raises(TooManyAccountKeysError):
            builder.build()


class TestBuild:
    """Tests for building messages."""

    def test_simple_transaction(self, builder, fee_payer, blockhash, program_id):
        """Test one instruction with no accounts."""
        tx = builder.add_instruction(Instruction(program_id, [], b"\x01\x02\x03")).build()

        assert tx.message.account_keys == [fee_payer, program_id]
        assert tx.message.header == MessageHeader(1, 0, 1)
        assert tx.message.recent_blockhash == blockhash
        assert len(tx.message.instructions) == 1
        assert tx.message.instructions[0].program_id_index == 1
        assert tx.message.instructions[0].data == b"\x01\x02\x03"
        assert tx.signatures is None
        assert tx.serialize()[0] == 0x00

    def test_deduplication_with_promotion(self, builder, fee_payer, program_id):
        """Test a shared account appears once, promoted to writable."""
        shared = key(4)
        builder.add_instruction(Instruction(program_id, [AccountMeta.readonly(shared)]))
        builder.add_instruction(Instruction(program_id, [AccountMeta.writable(shared)]))
        tx = builder.build()

        assert tx.message.account_keys == [fee_payer, shared, program_id]
        assert tx.message.header == MessageHeader(1, 0, 1)
        index = tx.message.account_keys.index(shared)
        assert tx.message.is_writable(index)
        assert not tx.message.is_signer(index)
        assert [ix.accounts for ix in tx.message.instructions] == [[1], [1]]

    def test_canonical_order(self, builder, fee_payer):
        """Test accounts are ordered by privilege bucket."""
        builder.add_instruction(Instruction(
            SYSTEM_PROGRAM_ID,
            [
                AccountMeta.readonly(key(10)),
                AccountMeta.writable(key(11)),
                AccountMeta.readonly(key(12), signer=True),
                AccountMeta.writable(key(13), signer=True),
            ],
        ))
        builder.add_instruction(Instruction(MEMO_PROGRAM_ID, [AccountMeta.readonly(key(12), signer=True)]))
        tx = builder.build()

        assert tx.message.account_keys == [
            fee_payer, key(13),
            key(12),
            key(11),
            SYSTEM_PROGRAM_ID, key(10), MEMO_PROGRAM_ID,
        ]
        assert tx.message.header == MessageHeader(3, 1, 3)
        assert tx.message.instructions[0].accounts == [5, 3, 2, 1]
        assert tx.message.instructions[1].program_id_index == 6

    def test_fee_payer_first_even_if_referenced_later(self, builder, fee_payer, program_id):
        """Test fee payer stays at index 0 when also an instruction account."""
        other_signer = key(9)
        builder.add_instruction(Instruction(
            program_id,
            [AccountMeta.writable(other_signer, signer=True), AccountMeta.readonly(fee_payer)],
        ))
        tx = builder.build()
        assert tx.message.account_keys[0] == fee_payer
        assert tx.message.account_keys[1] == other_signer
        assert tx.message.header.num_required_signatures == 2

    def test_deterministic(self, builder, program_id):
        """Test building twice from the same inputs is byte-identical."""
        builder.add_instruction(Instruction(
            program_id,
            [AccountMeta.writable(key(5)), AccountMeta.readonly(key(6), signer=True)],
            b"\xde\xad\xbe\xef",
        ))
        assert builder.build().serialize() == builder.build().serialize()

    def test_built_message_independent_of_builder(self, builder, program_id):
        """Test later builder changes do not affect a built transaction."""
        ix = Instruction(program_id, [AccountMeta.writable(key(5))])
        builder.add_instruction(ix)
        tx = builder.build()
        before = tx.serialize()

        ix.accounts.append(AccountMeta.writable(key(6)))
        builder.add_instruction(Instruction(program_id))
        assert tx.serialize() == before

    def test_add_instructions(self, builder, program_id):
        """Test adding several instructions keeps their order."""
        builder.add_instructions([
            Instruction(program_id, data=b"\x01"),
            Instruction(MEMO_PROGRAM_ID, data=b"\x02"),
        ])
        tx = builder.build()
        assert tx.data(0) == b"\x01"
        assert tx.data(1) == b"\x02"
        assert tx.data(2) is None


class TestTransactionEncoding:
    """Tests for Transaction serialize/deserialize."""

    def test_unsigned_roundtrip(self, builder, program_id):
        """Test an unsigned transaction decodes with no signatures."""
        tx = builder.add_instruction(Instruction(program_id, [AccountMeta.writable(key(5))], b"\x01")).build()
        data = tx.serialize()
        decoded = Transaction.deserialize(data)
        assert decoded == tx
        assert decoded.signatures is None
        assert decoded.serialize() == data

    def test_signed_roundtrip(self, builder, program_id, payer_keypair):
        """Test a signed transaction decodes to the same signatures and message."""
        builder.set_fee_payer(payer_keypair.pubkey())
        tx = builder.add_instruction(Instruction(program_id, [], b"\x09")).build_signed([payer_keypair])
        data = tx.serialize()
        assert data[0] == 1
        assert data[1:65] == tx.signatures[0].raw
        assert data[65:] == tx.message.serialize()

        decoded = Transaction.deserialize(data)
        assert decoded == tx
        decoded.verify()

    def test_base64(self, builder, program_id):
        """Test base64 form used for JSON transport."""
        tx = builder.add_instruction(Instruction(program_id)).build()
        encoded = tx.to_base64()
        assert base64.b64decode(encoded) == tx.serialize()
        assert Transaction.from_base64(encoded) == tx

    def test_deserialize_truncated_signatures(self):
        """Test a signature count larger than the data."""
        with pytest.raises(DecodeError):
            Transaction.deserialize(b"\x02" + bytes(64))

    def test_signature_property(self, builder, program_id):
        """Test the transaction id is the first signature."""
        tx = builder.add_instruction(Instruction(program_id)).build()
        assert tx.signature is None
        tx.signatures = [Signature(bytes([5] * 64))]
        assert tx.signature == Signature(bytes([5] * 64))


class TestTransactionAccessors:
    """Tests for instruction-level accessors."""

    def test_key_and_signer_key(self, builder, fee_payer, program_id):
        """Test resolving instruction account positions to keys."""
        builder.add_instruction(Instruction(
            program_id,
            [AccountMeta.writable(fee_payer, signer=True), AccountMeta.writable(key(5))],
        ))
        tx = builder.build()
        assert tx.key(0, 0) == fee_payer
        assert tx.key(0, 1) == key(5)
        assert tx.key(0, 2) is None
        assert tx.key(1, 0) is None
        assert tx.signer_key(0, 0) == fee_payer
        assert tx.signer_key(0, 1) is None

    def test_blockhash_replaced_on_sign(self, builder, program_id, payer_keypair):
        """Test signing with a new blockhash updates the message."""
        builder.set_fee_payer(payer_keypair.pubkey())
        tx = builder.add_instruction(Instruction(program_id)).build()
        new_hash = Blockhash(bytes([42] * 32))
        tx.sign([payer_keypair], new_hash)
        assert tx.message.recent_blockhash == new_hash
        tx.verify()
