"""Transaction building and signing errors"""

from typing import List, Optional


class TransactionError(Exception):
    """Base error for transaction construction, encoding and signing"""


class BuildError(TransactionError):
    """A transaction message could not be built"""


class NoFeePayerError(BuildError):
    """No fee payer was set on the builder"""
    def __init__(self):
        super().__init__('Fee payer not set')


class NoRecentBlockhashError(BuildError):
    """No recent blockhash was set on the builder"""
    def __init__(self):
        super().__init__('Recent blockhash not set')


class NoInstructionsError(BuildError):
    """The builder holds no instructions"""
    def __init__(self):
        super().__init__('Transaction has no instructions')


class TooManyAccountKeysError(BuildError):
    """Account keys do not fit in a one-byte index"""
    def __init__(self, count: int, limit: int = 256):
        self.count = count
        self.limit = limit
        super().__init__(
            f'Too many account keys: {count} (account indices are one byte, limit {limit})'
        )


class TooManySignersError(BuildError):
    """Required signature count does not fit in the one-byte header field"""
    def __init__(self, count: int, limit: int = 255):
        self.count = count
        self.limit = limit
        super().__init__(f'Too many required signers: {count} (header limit {limit})')


class AccountNotFoundError(BuildError):
    """An instruction references a key missing from the ordered account list"""
    def __init__(self, pubkey):
        self.pubkey = pubkey
        super().__init__(f'Account {pubkey} not found in message account keys')


class SignerError(TransactionError):
    """Signing or signature verification failed"""


class NotEnoughSignersError(SignerError):
    """Required signature slots are still empty"""
    def __init__(self, missing: Optional[List] = None, message: Optional[str] = None):
        self.missing = list(missing or [])
        if message is None:
            if self.missing:
                keys = ', '.join(str(pk) for pk in self.missing)
                message = f'Missing signatures for required signers: {keys}'
            else:
                message = 'Transaction has fewer signatures than required signers'
        super().__init__(message)


class MissingSignerError(NotEnoughSignersError):
    """A required signer never provided a signature"""


class SignatureVerificationFailedError(SignerError):
    """A present signature does not verify against its key and the message"""
    def __init__(self, index: int, pubkey):
        self.index = index
        self.pubkey = pubkey
        super().__init__(
            f'Signature verification failed for signer {pubkey} at index {index}'
        )


class EncodingError(TransactionError, ValueError):
    """A value cannot be represented in the wire format"""


class DecodeError(EncodingError):
    """Bytes are not a valid wire encoding"""
