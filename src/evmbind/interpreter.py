"""Bytecode execution collaborators used for constructor stripping.

The generator only needs one capability from an EVM: run some code with
some input and hand back what it returned. `Interpreter` names that
capability so that tests can pass a deterministic stub; `Web3Interpreter`
provides it through a node's JSON-RPC `eth_call`.
"""
from __future__ import annotations

from typing import Protocol

from eth_utils import encode_hex
from web3 import HTTPProvider, Web3
from web3.types import TxParams

from evmbind.errors import ExecutionError

DEFAULT_GAS = 30_000_000
DEFAULT_TIMEOUT = 30


class Interpreter(Protocol):
    """Anything that can execute EVM bytecode."""

    def execute(self, code: bytes, data: bytes) -> bytes:
        """Runs `code` with `data` as input and returns the RETURN payload.

        Raises:
            ExecutionError: If execution fails (invalid opcode, revert,
                out of gas, or the backend is unreachable).
        """
        ...


class Web3Interpreter:
    """Executes bytecode as a contract-creation `eth_call` on a node."""

    def __init__(
        self,
        rpc_endpoint: str,
        *,
        gas: int = DEFAULT_GAS,
        timeout: int = DEFAULT_TIMEOUT
    ) -> None:
        """
        Initialize the Web3Interpreter.

        Args:
            rpc_endpoint: JSON-RPC URL of an Ethereum node.
            gas: Gas budget for each execution.
            timeout: HTTP request timeout in seconds.

        Raises:
            ValueError: If rpc_endpoint is empty.
        """
        if not rpc_endpoint:
            raise ValueError("rpc_endpoint must be provided")

        self._w3 = Web3(HTTPProvider(rpc_endpoint, request_kwargs={"timeout": timeout}))
        self._gas = gas

    def execute(self, code: bytes, data: bytes) -> bytes:
        """
        Run `code` as init code with `data` appended, without a recipient.

        A call without `to` is executed by the node as contract creation, so
        the result is whatever the code passed to RETURN.

        Args:
            code: The bytecode to execute.
            data: Input appended to the code (constructor arguments).

        Returns:
            The bytes returned by the execution.

        Raises:
            ExecutionError: The node rejected or failed the execution.
        """
        tx: TxParams = {
            "data": encode_hex(code + data),
            "gas": self._gas,
        }
        try:
            return bytes(self._w3.eth.call(tx))
        except Exception as e:
            raise ExecutionError(_node_message(e)) from e


def _node_message(err: Exception) -> str:
    """Returns the node's own error text for a failed call.

    web3 keeps it in `message` (ContractLogicError) or, for raw JSON-RPC
    errors, in the error object passed as the first argument.
    """
    message = getattr(err, "message", None)
    if isinstance(message, str) and message:
        return message
    if err.args and isinstance(err.args[0], dict) and "message" in err.args[0]:
        return str(err.args[0]["message"])
    return str(err)
