"""Example: Collect signatures from several parties"""

import struct

from solana_txbuilder import (
    AccountMeta,
    Blockhash,
    Instruction,
    Keypair,
    Presigner,
    Transaction,
    TransactionBuilder,
    get_signer_positions,
)
from solana_txbuilder.constants import SYSTEM_PROGRAM_ID

TRANSFER = 2


def main():
    fee_payer = Keypair.generate()
    treasury = Keypair.generate()
    auditor = Keypair.generate()
    recipient = Keypair.generate().pubkey()

    # Offline: no RPC needed, any blockhash works for the demo
    blockhash = Blockhash.new_unique()

    tx = (
        TransactionBuilder()
        .set_fee_payer(fee_payer.pubkey())
        .set_recent_blockhash(blockhash)
        .add_instruction(Instruction(
            SYSTEM_PROGRAM_ID,
            [AccountMeta.writable(treasury.pubkey(), signer=True), AccountMeta.writable(recipient)],
            struct.pack('<IQ', TRANSFER, 5_000_000),
        ))
        .add_instruction(Instruction(
            SYSTEM_PROGRAM_ID,
            [AccountMeta.readonly(auditor.pubkey(), signer=True)],
        ))
        .build()
    )

    signers = [fee_payer, treasury, auditor]
    for signer, position in zip(signers, get_signer_positions(tx.message, signers)):
        print(f"{signer.pubkey()} signs slot {position}")

    # Each party signs its own copy of the wire bytes
    unsigned = tx.serialize()

    treasury_copy = Transaction.deserialize(unsigned)
    treasury_copy.partial_sign([treasury])
    print(f"\nTreasury signed, complete: {treasury_copy.is_signed()}")

    # The auditor signs the message offline and hands back only a signature
    auditor_signature = auditor.sign(tx.message.serialize())

    # The fee payer assembles everything
    tx.partial_sign([fee_payer, Presigner(auditor.pubkey(), auditor_signature)])
    tx.partial_sign([Presigner(treasury.pubkey(), treasury_copy.signatures[1])])
    print(f"All signed, complete: {tx.is_signed()}")

    tx.verify()
    print(f"Verified transaction {tx.signature}")
    print(f"Base64: {tx.to_base64()}")


if __name__ == '__main__':
    main()
