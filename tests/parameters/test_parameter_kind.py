# tests/parameters/test_parameter_kind.py
"""
Test suite per parameter_kind.py ed exceptions.py.

Copre:
- Enumerazione chiusa (membri e valori YAML)
- label leggibile
- from_name: membro, valore YAML, nome membro, errori
- Messaggi e gerarchia delle eccezioni
"""

import pytest

from parameters.exceptions import (
    CyclicDependencyError,
    OutOfRangeError,
    ParameterError,
    UnknownKindError,
)
from parameters.parameter_kind import ParameterKind


class TestParameterKindMembers:

    def test_enum_is_closed_on_six_kinds(self):
        assert [k.name for k in ParameterKind] == [
            'CARAFE_HEIGHT',
            'BASE_DIAMETER',
            'THROAT_DIAMETER',
            'STOPPER_HEIGHT',
            'HANDLE_LENGTH',
            'HANDLE_ANGLE',
        ]

    def test_values_are_snake_case_names(self):
        for kind in ParameterKind:
            assert kind.value == kind.name.lower()

    def test_label(self):
        assert ParameterKind.CARAFE_HEIGHT.label == 'Carafe height'
        assert ParameterKind.HANDLE_ANGLE.label == 'Handle angle'


class TestFromName:

    def test_member_is_returned_as_is(self):
        kind = ParameterKind.BASE_DIAMETER
        assert ParameterKind.from_name(kind) is kind

    @pytest.mark.parametrize("name", [
        'handle_length', 'HANDLE_LENGTH', 'handle_LENGTH', '  handle_length  ',
    ])
    def test_string_names_are_resolved(self, name):
        assert ParameterKind.from_name(name) is ParameterKind.HANDLE_LENGTH

    @pytest.mark.parametrize("name", ['lid_height', '', 'carafe', 42, None])
    def test_unknown_names_raise(self, name):
        with pytest.raises(UnknownKindError):
            ParameterKind.from_name(name)


class TestExceptions:

    def test_out_of_range_attributes_and_message(self):
        err = OutOfRangeError(ParameterKind.BASE_DIAMETER, -10.0, 50.0, 100.0)

        assert err.kind is ParameterKind.BASE_DIAMETER
        assert err.value == -10.0
        assert err.min_value == 50.0
        assert err.max_value == 100.0
        assert 'base_diameter' in str(err)
        assert '-10.0' in str(err)
        assert '[50.0, 100.0]' in str(err)

    def test_out_of_range_is_value_error(self):
        err = OutOfRangeError(ParameterKind.BASE_DIAMETER, -10.0, 50.0, 100.0)
        assert isinstance(err, ValueError)
        assert isinstance(err, ParameterError)

    def test_unknown_kind_is_key_error(self):
        err = UnknownKindError('lid_height')

        assert isinstance(err, KeyError)
        assert isinstance(err, ParameterError)
        assert err.kind == 'lid_height'

    def test_unknown_kind_message_lists_available(self):
        message = str(UnknownKindError('lid_height'))

        assert message.startswith("Parametro 'lid_height' non definito")
        for kind in ParameterKind:
            assert kind.value in message

    def test_cyclic_dependency_message(self):
        err = CyclicDependencyError([
            ParameterKind.BASE_DIAMETER,
            ParameterKind.THROAT_DIAMETER,
            ParameterKind.BASE_DIAMETER,
        ])

        assert isinstance(err, RuntimeError)
        assert err.cycle[0] is ParameterKind.BASE_DIAMETER
        assert 'base_diameter -> throat_diameter -> base_diameter' in str(err)
