"""Client configuration"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_TIMEOUT = 30
DEFAULT_COMMITMENT = 'confirmed'


@dataclass
class ClientConfig:
    """Configuration for the RPC client"""
    rpc_url: str
    timeout: float = DEFAULT_TIMEOUT
    commitment: str = DEFAULT_COMMITMENT

    @classmethod
    def from_env(cls) -> 'ClientConfig':
        """
        Read configuration from the environment (and a .env file if present)

        Uses SOLANA_RPC_URL, SOLANA_RPC_TIMEOUT and SOLANA_COMMITMENT.
        """
        load_dotenv()
        rpc_url = os.getenv('SOLANA_RPC_URL')
        if not rpc_url:
            raise ValueError('RPC URL must be provided either as parameter or SOLANA_RPC_URL environment variable')
        return cls(
            rpc_url=rpc_url,
            timeout=float(os.getenv('SOLANA_RPC_TIMEOUT', DEFAULT_TIMEOUT)),
            commitment=os.getenv('SOLANA_COMMITMENT', DEFAULT_COMMITMENT),
        )
