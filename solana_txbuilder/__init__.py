"""Solana transaction building, signing and verification"""

from .accounts import ResolvedAccount, order_accounts, resolve_accounts
from .client import BlockhashSource, RpcError, SolanaRpcClient, TransactionSender
from .config import ClientConfig
from .errors import (
    AccountNotFoundError,
    BuildError,
    DecodeError,
    EncodingError,
    MissingSignerError,
    NoFeePayerError,
    NoInstructionsError,
    NoRecentBlockhashError,
    NotEnoughSignersError,
    SignatureVerificationFailedError,
    SignerError,
    TooManyAccountKeysError,
    TooManySignersError,
    TransactionError,
)
from .instruction import AccountMeta, Instruction
from .keys import Blockhash, Pubkey, Signature
from .message import CompiledInstruction, Message, MessageHeader, compile_instructions
from .signer import (
    Keypair,
    NullSigner,
    Presigner,
    Signer,
    get_signer_positions,
    partial_sign_transaction,
    sign_message,
    sign_transaction,
    verify_transaction,
)
from .transaction import Transaction, TransactionBuilder

__version__ = '0.1.0'

__all__ = [
    'AccountMeta',
    'AccountNotFoundError',
    'Blockhash',
    'BlockhashSource',
    'BuildError',
    'ClientConfig',
    'CompiledInstruction',
    'DecodeError',
    'EncodingError',
    'Instruction',
    'Keypair',
    'Message',
    'MessageHeader',
    'MissingSignerError',
    'NoFeePayerError',
    'NoInstructionsError',
    'NoRecentBlockhashError',
    'NotEnoughSignersError',
    'NullSigner',
    'Presigner',
    'Pubkey',
    'ResolvedAccount',
    'RpcError',
    'Signature',
    'SignatureVerificationFailedError',
    'Signer',
    'SignerError',
    'SolanaRpcClient',
    'TooManyAccountKeysError',
    'TooManySignersError',
    'Transaction',
    'TransactionBuilder',
    'TransactionError',
    'TransactionSender',
    'compile_instructions',
    'get_signer_positions',
    'order_accounts',
    'partial_sign_transaction',
    'resolve_accounts',
    'sign_message',
    'sign_transaction',
    'verify_transaction',
]
