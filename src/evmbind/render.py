"""Renders a `BindingModel` into Go source.

Each binding packs its arguments with go-ethereum's `accounts/abi`, runs the
embedded bytecode through `core/vm/runtime` and unpacks the returned data,
panicking on any error. The helpers `parse_in`, `parse_out` and `parse_body`
compose the per-method pieces; the templates only substitute them.
"""
from __future__ import annotations

from string import Template
from typing import Sequence

from evmbind.types import BindingModel, MethodSignature, Parameter

GENERATED_FILENAME = "evm.go"

FILE_TEMPLATE = Template("""\
// Code generated by evmbind. DO NOT EDIT.

package $package

import (
\t"math/big"
\t"strings"

\t"github.com/ethereum/go-ethereum/accounts/abi"
\t"github.com/ethereum/go-ethereum/common"
\t"github.com/ethereum/go-ethereum/core/vm/runtime"
)

// Reference imports to suppress errors if they are not otherwise used.
var (
\t_ = big.NewInt
\t_ = runtime.Execute
)

// ABI is the input ABI used to generate the binding from.
const ABI = "$abi"

// Bin is the bytecode the bindings execute.
const Bin = "$bin"

var (
\tparsedABI = mustParseABI(ABI)
\tcode      = common.Hex2Bytes(Bin)
)

func mustParseABI(def string) abi.ABI {
\tparsed, err := abi.JSON(strings.NewReader(def))
\tif err != nil {
\t\tpanic(err)
\t}
\treturn parsed
}
$functions""")

FUNC_TEMPLATE = Template("""
// $name binds the contract method $selector.
//
// Solidity: $raw
func $name($params)$returns {
$body}
""")

CALL_TEMPLATE = Template("""\
\tinput, err := parsedABI.Pack("$method"$args)
\tif err != nil {
\t\tpanic(err)
\t}

""")

EXEC_ONLY_TEMPLATE = Template("""\
\tif _, _, err := runtime.Execute(code, input, nil); err != nil {
\t\tpanic(err)
\t}
""")

EXEC_RETURN_TEMPLATE = Template("""\
\tret, _, err := runtime.Execute(code, input, nil)
\tif err != nil {
\t\tpanic(err)
\t}

\tres, err := parsedABI.Unpack("$method", ret)
\tif err != nil {
\t\tpanic(err)
\t}

\treturn $results
""")


def parse_in(inputs: Sequence[Parameter]) -> str:
    """Go parameter list, e.g. "a *big.Int, b *big.Int"."""
    return ", ".join(f"{p.identifier} {p.go_type}" for p in inputs)


def parse_out(outputs: Sequence[Parameter]) -> str:
    """Go result list: empty, a single type, or a parenthesized tuple."""
    types = ", ".join(p.go_type for p in outputs)
    if len(outputs) > 1:
        return f"({types})"
    return types


def call_arguments(inputs: Sequence[Parameter]) -> str:
    """Arguments forwarded to Pack after the method name, e.g. ", a, b"."""
    return "".join(f", {p.identifier}" for p in inputs)


def result_extractions(outputs: Sequence[Parameter]) -> str:
    """Type-asserted unpacked results, e.g. "res[0].(*big.Int), res[1].(bool)"."""
    return ", ".join(f"res[{i}].({p.go_type})" for i, p in enumerate(outputs))


def parse_body(method: str, inputs: Sequence[Parameter], outputs: Sequence[Parameter]) -> str:
    """Body of a binding: pack, execute, and unpack when there are outputs."""
    body = CALL_TEMPLATE.substitute(method=method, args=call_arguments(inputs))
    if not outputs:
        return body + EXEC_ONLY_TEMPLATE.substitute()
    return body + EXEC_RETURN_TEMPLATE.substitute(method=method, results=result_extractions(outputs))


def render_method(method: MethodSignature) -> str:
    returns = parse_out(method.outputs)
    return FUNC_TEMPLATE.substitute(
        name=method.name,
        selector=method.selector,
        raw=method.raw,
        params=parse_in(method.inputs),
        returns=f" {returns}" if returns else "",
        body=parse_body(method.method, method.inputs, method.outputs),
    )


def render(model: BindingModel) -> str:
    """Renders the complete Go source file for a binding model."""
    return FILE_TEMPLATE.substitute(
        package=model.package_name,
        abi=model.abi_text,
        bin=model.bytecode_text,
        functions="".join(render_method(m) for m in model.methods),
    )
