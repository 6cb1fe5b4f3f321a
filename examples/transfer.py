"""Example: Build, sign and send a SOL transfer with a memo"""

import struct

from solana_txbuilder import AccountMeta, Instruction, Keypair, Pubkey, SolanaRpcClient, TransactionBuilder
from solana_txbuilder.constants import MEMO_PROGRAM_ID, SYSTEM_PROGRAM_ID

# System program instruction index for Transfer
TRANSFER = 2


def transfer_instruction(sender: Pubkey, recipient: Pubkey, lamports: int) -> Instruction:
    return Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=[
            AccountMeta.writable(sender, signer=True),
            AccountMeta.writable(recipient),
        ],
        data=struct.pack('<IQ', TRANSFER, lamports),
    )


def memo_instruction(signer: Pubkey, text: str) -> Instruction:
    return Instruction(
        program_id=MEMO_PROGRAM_ID,
        accounts=[AccountMeta.readonly(signer, signer=True)],
        data=text.encode('utf-8'),
    )


def main():
    # Reads SOLANA_RPC_URL from the environment or a .env file
    client = SolanaRpcClient()

    payer = Keypair.generate()
    recipient = Keypair.generate().pubkey()
    print(f"Payer: {payer.pubkey()}")
    print(f"Recipient: {recipient}")

    # Build and sign
    blockhash = client.get_latest_blockhash()
    tx = (
        TransactionBuilder()
        .set_fee_payer(payer.pubkey())
        .set_recent_blockhash(blockhash)
        .add_instruction(transfer_instruction(payer.pubkey(), recipient, 1_000_000))
        .add_instruction(memo_instruction(payer.pubkey(), 'hello from solana_txbuilder'))
        .build_signed([payer])
    )

    header = tx.message.header
    print(f"\nAccounts: {len(tx.message.account_keys)}")
    print(f"Header: {header.num_required_signatures} signers, "
          f"{header.num_readonly_signed_accounts} read-only signed, "
          f"{header.num_readonly_unsigned_accounts} read-only unsigned")
    print(f"Wire size: {len(tx.serialize())} bytes")

    # Send
    signature = client.send_transaction(tx)
    print(f"\nTransaction sent: {signature}")

    statuses = client.get_signature_statuses([signature])
    print(f"Status: {statuses[0]}")


if __name__ == '__main__':
    main()
