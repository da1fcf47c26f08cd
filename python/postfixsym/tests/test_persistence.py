# PostfixSym SDK - Persistence Tests
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Tests for saving and reloading expression trees.
"""

import json
import math

import pytest

from postfixsym import parse, SerializationError, UnrecognizedOperator
from postfixsym.persistence import to_dict, from_dict, save, load
from postfixsym.expr import Literal, Named, BinaryResult
from postfixsym.operations import ADD


class TestDictEncoding:
    """Tests for to_dict() and from_dict()."""

    def test_literal(self):
        assert to_dict(Literal(2.5)) == {'kind': 'literal', 'value': 2.5}

    def test_tree(self):
        assert to_dict(parse("x 2 ^ sin")) == {
            'kind': 'unary',
            'func': 'sin',
            'arg': {
                'kind': 'binary',
                'op': '^',
                'left': {'kind': 'named', 'name': 'x'},
                'right': {'kind': 'literal', 'value': 2.0},
            },
        }

    def test_rebuilt_tree_shares_bundles(self):
        """Bundles are looked up again by token, not copied."""
        original = parse("4 3 / pi * r 3 ^ *")
        rebuilt = from_dict(to_dict(original))
        assert rebuilt == original
        assert rebuilt.op is original.op

    def test_unknown_kind(self):
        with pytest.raises(SerializationError, match="Unknown node kind"):
            from_dict({'kind': 'matrix'})

    def test_missing_field(self):
        with pytest.raises(SerializationError, match="Missing field"):
            from_dict({'kind': 'binary', 'op': '+', 'left': {'kind': 'literal', 'value': 1}})

    def test_not_a_dict(self):
        with pytest.raises(SerializationError):
            from_dict(['literal', 1])

    def test_bad_literal(self):
        with pytest.raises(SerializationError):
            from_dict({'kind': 'literal', 'value': 'abc'})

    def test_unknown_function(self):
        with pytest.raises(UnrecognizedOperator):
            from_dict({'kind': 'unary', 'func': 'sqrt', 'arg': {'kind': 'named', 'name': 'x'}})


class TestFiles:
    """Tests for save() and load()."""

    def test_save_load(self, tmp_path):
        path = tmp_path / "expr.json"
        expr = parse("x 2 ^ sin x cos *")
        save(expr, path)
        assert load(path) == expr

    def test_file_is_json(self, tmp_path):
        path = tmp_path / "expr.json"
        save(parse("x 1 +"), str(path))
        data = json.loads(path.read_text())
        assert data['format_version'] == 1
        assert data['expr']['op'] == '+'

    def test_non_finite_literal(self, tmp_path):
        path = tmp_path / "expr.json"
        save(BinaryResult(ADD, Named("x"), Literal(math.inf)), path)
        assert load(path).right.value == math.inf

    def test_wrong_payload(self, tmp_path):
        path = tmp_path / "other.json"
        path.write_text(json.dumps({'something': 'else'}))
        with pytest.raises(SerializationError):
            load(path)

    def test_wrong_version(self, tmp_path):
        path = tmp_path / "expr.json"
        path.write_text(json.dumps({'format_version': 99, 'expr': {'kind': 'named', 'name': 'x'}}))
        with pytest.raises(SerializationError, match="version"):
            load(path)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
