# tests/spec/test_spec.py

import json

import pytest

from pyvider.pluginrpc.exception import DuplicateArgsError, DuplicatePathError, ProtocolError
from pyvider.pluginrpc.procedure import new_procedure
from pyvider.pluginrpc.spec import Spec, combine_specs, new_spec, spec_from_json


def test_new_spec(echo_spec):
    assert len(echo_spec) == 3
    assert [procedure.path for procedure in echo_spec] == [
        "/buf.pluginrpc.example.v1.EchoService/EchoRequest",
        "/buf.pluginrpc.example.v1.EchoService/EchoList",
        "/buf.pluginrpc.example.v1.EchoService/EchoError",
    ]


def test_procedure_for_path(echo_spec):
    procedure = echo_spec.procedure_for_path("/buf.pluginrpc.example.v1.EchoService/EchoError")
    assert procedure is not None
    assert procedure.args == ("echo", "error")
    assert echo_spec.procedure_for_path("/buf.pluginrpc.example.v1.EchoService/Nope") is None


def test_empty_spec():
    spec = new_spec([])
    assert len(spec) == 0
    assert spec.procedure_for_path("/a") is None


def test_duplicate_path():
    with pytest.raises(DuplicatePathError) as excinfo:
        new_spec([new_procedure("/a", "x"), new_procedure("/a", "y")])
    assert excinfo.value.path == "/a"


def test_duplicate_args():
    with pytest.raises(DuplicateArgsError) as excinfo:
        new_spec([new_procedure("/a", "x", "y"), new_procedure("/b", "x", "y")])
    assert excinfo.value.args_list == ["x", "y"]
    assert "x y" in str(excinfo.value)


def test_first_conflict_in_input_order_is_reported():
    procedures = [
        new_procedure("/a", "x"),
        new_procedure("/b", "x"),
        new_procedure("/a"),
    ]
    with pytest.raises(DuplicateArgsError):
        new_spec(procedures)


def test_procedures_without_args_do_not_collide():
    spec = new_spec([new_procedure("/a"), new_procedure("/b"), new_procedure("/c")])
    assert len(spec) == 3


def test_args_prefix_is_not_a_collision():
    spec = new_spec([new_procedure("/a", "x"), new_procedure("/b", "x", "y")])
    assert len(spec) == 2


def test_spec_constructor_validates():
    with pytest.raises(DuplicatePathError):
        Spec(procedures=(new_procedure("/a"), new_procedure("/a")))


def test_combine_specs():
    first = new_spec([new_procedure("/a", "a")])
    second = new_spec([new_procedure("/b", "b"), new_procedure("/c")])
    combined = combine_specs(first, second)
    assert [procedure.path for procedure in combined] == ["/a", "/b", "/c"]
    assert set(combine_specs(second, first).procedures) == set(combined.procedures)


def test_combine_no_specs():
    assert len(combine_specs()) == 0


def test_combine_specs_rejects_cross_spec_duplicates():
    first = new_spec([new_procedure("/a", "x")])
    with pytest.raises(DuplicatePathError):
        combine_specs(first, new_spec([new_procedure("/a", "y")]))
    with pytest.raises(DuplicateArgsError):
        combine_specs(first, new_spec([new_procedure("/b", "x")]))


def test_to_json(echo_spec):
    data = echo_spec.to_json()
    assert b"\n" not in data
    assert json.loads(data) == {
        "procedures": [
            {"path": "/buf.pluginrpc.example.v1.EchoService/EchoRequest", "args": ["echo", "request"]},
            {"path": "/buf.pluginrpc.example.v1.EchoService/EchoList"},
            {"path": "/buf.pluginrpc.example.v1.EchoService/EchoError", "args": ["echo", "error"]},
        ]
    }


def test_spec_from_json(echo_spec):
    assert spec_from_json(echo_spec.to_json()) == echo_spec
    assert spec_from_json(echo_spec.to_json().decode("utf-8") + "\n") == echo_spec


@pytest.mark.parametrize("data", [b"", b"not json", b'{"procedures": 1}', b'{"unknown": []}'])
def test_spec_from_json_invalid(data):
    with pytest.raises(ProtocolError):
        spec_from_json(data)


def test_spec_from_json_validates():
    data = b'{"procedures": [{"path": "/a"}, {"path": "/a"}]}'
    with pytest.raises(DuplicatePathError):
        spec_from_json(data)
