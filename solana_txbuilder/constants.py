"""Well-known program ids and wire format limits"""

from .keys import Pubkey

# Account indices are a single byte
MAX_ACCOUNT_KEYS = 256

MESSAGE_HEADER_LENGTH = 3

SYSTEM_PROGRAM_ID = Pubkey.from_base58('11111111111111111111111111111111')
MEMO_PROGRAM_ID = Pubkey.from_base58('MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr')
TOKEN_PROGRAM_ID = Pubkey.from_base58('TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA')
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_base58('ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL')
COMPUTE_BUDGET_PROGRAM_ID = Pubkey.from_base58('ComputeBudget111111111111111111111111111111')

KNOWN_PROGRAMS = {
    'system': SYSTEM_PROGRAM_ID,
    'memo': MEMO_PROGRAM_ID,
    'token': TOKEN_PROGRAM_ID,
    'associated_token': ASSOCIATED_TOKEN_PROGRAM_ID,
    'compute_budget': COMPUTE_BUDGET_PROGRAM_ID,
}


def get_program_name(program_id: Pubkey) -> str:
    """Name of a known program, or its base58 address"""
    for name, key in KNOWN_PROGRAMS.items():
        if key == program_id:
            return name
    return str(program_id)
