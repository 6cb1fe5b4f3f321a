"""RPC client supplying blockhashes and submitting transactions"""

from typing import Any, Dict, List, Optional, Protocol

import httpx
from loguru import logger

from .config import ClientConfig
from .keys import Blockhash, Pubkey
from .transaction import Transaction


class RpcError(Exception):
    """RPC Error"""
    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"RPC Error {code}: {message}")


class BlockhashSource(Protocol):
    """Anything that can supply a recent blockhash"""

    def get_latest_blockhash(self) -> Blockhash:
        ...


class TransactionSender(Protocol):
    """Anything that can submit a signed transaction"""

    def send_transaction(self, transaction: Transaction) -> str:
        ...


class SolanaRpcClient:
    """Client for the JSON-RPC methods the transaction builder relies on"""

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        timeout: Optional[float] = None,
        commitment: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        config = ClientConfig.from_env() if rpc_url is None else ClientConfig(rpc_url=rpc_url)

        self.rpc_url = config.rpc_url
        self.timeout = timeout if timeout is not None else config.timeout
        self.commitment = commitment or config.commitment
        self._transport = transport
        self._request_id = 1

    def _call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make an RPC call"""
        request = {
            'jsonrpc': '2.0',
            'id': self._request_id,
            'method': method,
            'params': params or [],
        }
        self._request_id += 1
        logger.debug(f"RPC {method} -> {self.rpc_url}")

        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            response = client.post(self.rpc_url, json=request)
            response.raise_for_status()

            result = response.json()

            if 'error' in result:
                error = result['error']
                raise RpcError(error['code'], error['message'])

            return result.get('result')

    def _commitment_config(self) -> Dict[str, Any]:
        return {'commitment': self.commitment}

    def get_slot(self) -> int:
        """Get current slot"""
        return self._call('getSlot', [self._commitment_config()])

    def get_block_height(self) -> int:
        """Get current block height"""
        return self._call('getBlockHeight', [self._commitment_config()])

    def get_latest_blockhash(self) -> Blockhash:
        """Get latest blockhash"""
        result = self._call('getLatestBlockhash', [self._commitment_config()])
        return Blockhash.from_base58(result['value']['blockhash'])

    def send_transaction(self, transaction: Transaction) -> str:
        """Send a signed transaction, returning its signature"""
        params = [
            transaction.to_base64(),
            {'encoding': 'base64', 'preflightCommitment': self.commitment},
        ]
        signature = self._call('sendTransaction', params)
        logger.info(f"Submitted transaction {signature}")
        return signature

    def get_balance(self, address: Pubkey) -> int:
        """Get account balance in lamports"""
        result = self._call('getBalance', [str(address), self._commitment_config()])
        return result['value']

    def get_account_info(self, address: Pubkey) -> Optional[Dict[str, Any]]:
        """Get account information"""
        config = {**self._commitment_config(), 'encoding': 'base64'}
        result = self._call('getAccountInfo', [str(address), config])
        return result['value']

    def get_signature_statuses(self, signatures: List[str]) -> List[Optional[Dict[str, Any]]]:
        """Get confirmation status of submitted transactions"""
        result = self._call('getSignatureStatuses', [signatures])
        return result['value']
