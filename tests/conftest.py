"""Shared fixtures for transaction tests."""

import pytest

from solana_txbuilder import Blockhash, Keypair, Pubkey


@pytest.fixture
def fee_payer():
    return Pubkey(bytes([1] * 32))


@pytest.fixture
def blockhash():
    return Blockhash(bytes([2] * 32))


@pytest.fixture
def program_id():
    return Pubkey(bytes([3] * 32))


@pytest.fixture
def payer_keypair():
    return Keypair.from_seed(bytes([7] * 32))


@pytest.fixture
def second_keypair():
    return Keypair.from_seed(bytes([8] * 32))
