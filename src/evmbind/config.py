"""Options for a single binding generation run."""
from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from evmbind.interpreter import DEFAULT_GAS
from evmbind.render import GENERATED_FILENAME

DEFAULT_RPC_ENDPOINT = "http://127.0.0.1:8545"

_GO_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class BindConfig(BaseModel):
    """Everything the generator needs to produce one Go file.

    Attributes:
        abi_path: Path to the ABI JSON file.
        bin_path: Path to the hex bytecode file.
        package_name: Go package name for the generated file.
        out_dir: Existing directory the file is written into.
        strip_constructor: Embed runtime code instead of deployment code.
        rpc_endpoint: Node used to execute the constructor when stripping.
        gas: Gas budget for constructor execution.
    """
    model_config = ConfigDict(frozen=True)

    abi_path: Path
    bin_path: Path
    package_name: str
    out_dir: Path
    strip_constructor: bool = False
    rpc_endpoint: str = Field(default=DEFAULT_RPC_ENDPOINT, min_length=1)
    gas: int = Field(default=DEFAULT_GAS, gt=0)

    @field_validator("package_name")
    @classmethod
    def _check_package_name(cls, value: str) -> str:
        if not _GO_IDENTIFIER_RE.fullmatch(value):
            raise ValueError(f"{value!r} is not a valid Go package name")
        return value

    @property
    def output_path(self) -> Path:
        """Where the generated source is written."""
        return self.out_dir / GENERATED_FILENAME
