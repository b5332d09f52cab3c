# tests/conftest.py
import json

import pytest

from evmbind.errors import ExecutionError

# PUSH1 0a PUSH1 0c PUSH1 00 CODECOPY PUSH1 0a PUSH1 00 RETURN, followed by
# the 10-byte runtime code it copies out: return 42 as a uint256
DEPLOY_CODE = "600a600c600039600a6000f3" + "602a60005260206000f3"
RUNTIME_CODE = "602a60005260206000f3"

MOD_ABI = [
    {
        "name": "mod",
        "type": "function",
        "inputs": [{"name": "a", "type": "uint256"}, {"name": "b", "type": "uint256"}],
        "outputs": [{"name": "", "type": "uint256"}],
    }
]

TOKEN_ABI = [
    {
        "type": "constructor",
        "inputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "name": "transfer",
        "type": "function",
        "inputs": [{"name": "to", "type": "address"}, {"name": "value", "type": "uint256"}],
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
    },
    {
        "name": "Transfer",
        "type": "event",
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
        "anonymous": False,
    },
    {
        "name": "balanceOf",
        "type": "function",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "balance", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "name": "decimals",
        "type": "function",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
    },
]


class StubInterpreter:
    """Deterministic interpreter that mimics the CODECOPY/RETURN constructor.

    It returns everything after the first 12 bytes (the constructor prologue
    in DEPLOY_CODE), and records what it was asked to run.
    """

    def __init__(self, prologue: int = 12):
        self.prologue = prologue
        self.calls = []

    def execute(self, code, data):
        self.calls.append((code, data))
        return code[self.prologue:]


class FailingInterpreter:
    """Interpreter that always fails with a fixed message."""

    def __init__(self, message="execution reverted"):
        self.message = message
        self.calls = 0

    def execute(self, code, data):
        self.calls += 1
        raise ExecutionError(self.message)


@pytest.fixture
def stub_interpreter():
    return StubInterpreter()


@pytest.fixture
def failing_interpreter():
    return FailingInterpreter()


@pytest.fixture
def mod_abi_text():
    return json.dumps(MOD_ABI)


@pytest.fixture
def token_abi():
    return json.loads(json.dumps(TOKEN_ABI))
