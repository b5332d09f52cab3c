from evmbind.abi import parse_type
from evmbind.builder import build, build_from_text
from evmbind.render import (
    call_arguments,
    parse_body,
    parse_in,
    parse_out,
    render,
    result_extractions,
)
from evmbind.typemap import map_type
from evmbind.types import Parameter


def _param(name, abi_type, index=0):
    descriptor = parse_type(abi_type)
    return Parameter(name=name, index=index, type=descriptor, go_type=map_type(descriptor))


def _params(*pairs):
    return tuple(_param(n, t, i) for i, (n, t) in enumerate(pairs))


# --- Helpers -----------------------------------------------------------------

def test_parse_in():
    assert parse_in(_params(("a", "uint256"), ("b", "uint8"))) == "a *big.Int, b uint8"
    assert parse_in(_params(("", "address"), ("", "bytes32"))) == "arg0 common.Address, arg1 [32]byte"
    assert parse_in(()) == ""


def test_parse_out():
    assert parse_out(()) == ""
    assert parse_out(_params(("", "uint256"))) == "*big.Int"
    assert parse_out(_params(("", "bool"), ("", "bytes"))) == "(bool, []byte)"


def test_reserved_parameter_names_are_suffixed():
    params = _params(("res", "uint256"), ("code", "bytes"), ("type", "uint8"), ("owner", "address"))
    assert [p.identifier for p in params] == ["res_", "code_", "type_", "owner"]
    assert parse_in(params) == "res_ *big.Int, code_ []byte, type_ uint8, owner common.Address"


def test_call_arguments():
    assert call_arguments(_params(("a", "uint256"), ("", "bool"))) == ", a, arg1"
    assert call_arguments(()) == ""


def test_result_extractions():
    outputs = _params(("", "uint256"), ("ok", "bool"))
    assert result_extractions(outputs) == "res[0].(*big.Int), res[1].(bool)"


def test_parse_body_with_outputs():
    body = parse_body("mod", _params(("a", "uint256"), ("b", "uint256")), _params(("", "uint256")))
    assert '\tinput, err := parsedABI.Pack("mod", a, b)\n' in body
    assert "\tret, _, err := runtime.Execute(code, input, nil)\n" in body
    assert '\tres, err := parsedABI.Unpack("mod", ret)\n' in body
    assert body.endswith("\treturn res[0].(*big.Int)\n")


def test_parse_body_without_outputs():
    body = parse_body("reset", (), ())
    assert '\tinput, err := parsedABI.Pack("reset")\n' in body
    assert "if _, _, err := runtime.Execute(code, input, nil); err != nil {" in body
    assert "Unpack" not in body
    assert "return" not in body


# --- Whole file --------------------------------------------------------------

def test_render_mod_file(mod_abi_text):
    source = render(build_from_text(mod_abi_text, "6001", "test"))

    assert source.startswith("// Code generated by evmbind. DO NOT EDIT.\n\npackage test\n")
    assert 'const Bin = "6001"\n' in source
    assert 'const ABI = "[{\\"name\\":\\"mod\\",' in source
    assert "func Mod(a *big.Int, b *big.Int) *big.Int {\n" in source
    assert "// Solidity: function mod(uint256 a, uint256 b) returns(uint256)\n" in source
    assert '"github.com/ethereum/go-ethereum/core/vm/runtime"' in source


def test_render_keeps_method_order_and_signatures():
    document = [
        {"name": "set", "inputs": [{"name": "v", "type": "uint64"}], "outputs": []},
        {"name": "get", "inputs": [], "outputs": [{"name": "", "type": "uint64"}, {"name": "", "type": "address"}]},
    ]
    source = render(build(document, "store", document, "00"))

    assert source.index("func Set(") < source.index("func Get(")
    assert "func Set(v uint64) {\n" in source
    assert "func Get() (uint64, common.Address) {\n" in source
    assert "\treturn res[0].(uint64), res[1].(common.Address)\n" in source


def test_render_documents_selector(token_abi):
    source = render(build(token_abi, "token", token_abi, "00"))
    assert "// BalanceOf binds the contract method 0x70a08231." in source


def test_render_without_functions_still_uses_every_import():
    """An ABI with only events must still produce a compilable file"""
    source = render(build_from_text('[{"type":"event","name":"E","inputs":[]}]', "00", "events"))

    assert "\nfunc " not in source.split("func mustParseABI", 1)[1]
    assert "\t_ = runtime.Execute\n" in source
    assert "\t_ = big.NewInt\n" in source


def test_parameters_never_shadow_generated_names():
    """Inputs named like the body's locals or the file's globals stay distinct"""
    document = [{
        "name": "swap",
        "inputs": [{"name": "ret", "type": "uint256"}, {"name": "parsedABI", "type": "bool"}],
        "outputs": [{"name": "res", "type": "uint256"}],
    }]
    source = render(build(document, "pool", document, "00"))

    assert "func Swap(ret_ *big.Int, parsedABI_ bool) *big.Int {\n" in source
    assert '\tinput, err := parsedABI.Pack("swap", ret_, parsedABI_)\n' in source
    assert "\tret, _, err := runtime.Execute(code, input, nil)\n" in source
    assert "// Solidity: function swap(uint256 ret, bool parsedABI) returns(uint256 res)\n" in source
