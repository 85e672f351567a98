"""
Test suite per config_loader.py
Verifica parsing YAML, valutazione espressioni, ordine di applicazione e revert.
"""

import pytest
from unittest.mock import patch

from engine.config_loader import (
    REASON_DUPLICATE,
    REASON_NOT_A_NUMBER,
    REASON_OUT_OF_RANGE,
    REASON_UNKNOWN,
    ApplyResult,
    DesignLoader,
    Rejection,
    _eval_math_expressions,
    load_design,
)
from parameters.parameter_kind import ParameterKind as K
from parameters.parameter_set import ParameterSet


@pytest.fixture
def loader():
    return DesignLoader()


# =============================================================================
# TEST PARSING & MATH
# =============================================================================

class TestEvalMathExpressions:
    """Valutazione delle espressioni matematiche nel YAML."""

    def test_eval_simple_math(self):
        data = {'val': '(200 + 40)', 'div': '(240 * 2 / 3)'}
        result = _eval_math_expressions(data)
        assert result['val'] == 240
        assert result['div'] == 160.0

    def test_eval_nested_structure(self):
        data = {
            'list': ['(1+1)', {'inner': '(3*3)'}],
            'fixed': 10
        }
        result = _eval_math_expressions(data)
        assert result['list'][0] == 2
        assert result['list'][1]['inner'] == 9
        assert result['fixed'] == 10

    def test_eval_error_returns_original(self):
        """Divisione per zero: la stringa resta com'è."""
        assert _eval_math_expressions({'bad': '(1 / 0)'})['bad'] == '(1 / 0)'

    def test_plain_text_is_kept(self):
        assert _eval_math_expressions('tall') == 'tall'

    def test_numeric_string_becomes_float(self):
        assert _eval_math_expressions('62.5') == 62.5

    @pytest.mark.parametrize("text", ['nan', 'inf', '-inf', 'NaN'])
    def test_non_finite_strings_are_kept(self, text):
        assert _eval_math_expressions(text) == text


# =============================================================================
# TEST LOAD_DESIGN
# =============================================================================

class TestLoadDesign:

    def test_load_real_file(self, yaml_file):
        data = load_design(yaml_file)
        assert data['carafe']['carafe_height'] == 240
        assert data['carafe']['handle_angle'] == 45

    def test_expressions_are_evaluated(self, tmp_path):
        p = tmp_path / 'expr.yml'
        p.write_text("carafe:\n  handle_length: (240 * 2 / 3)\n", encoding='utf-8')

        assert load_design(str(p))['carafe']['handle_length'] == 160.0

    def test_empty_file_is_empty_dict(self, tmp_path):
        p = tmp_path / 'empty.yml'
        p.write_text("", encoding='utf-8')

        assert load_design(str(p)) == {}

    def test_non_mapping_raises(self, tmp_path):
        p = tmp_path / 'list.yml'
        p.write_text("- 1\n- 2\n", encoding='utf-8')

        with pytest.raises(ValueError, match='dizionario'):
            load_design(str(p))

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_design(str(tmp_path / 'nope.yml'))


# =============================================================================
# TEST SEZIONI
# =============================================================================

class TestSections:

    def test_design_values(self, loader):
        assert loader.design_values({'carafe': {'carafe_height': 200}}) == {'carafe_height': 200}

    def test_design_values_missing_or_empty(self, loader):
        assert loader.design_values({}) == {}
        assert loader.design_values({'carafe': None}) == {}

    def test_design_values_wrong_type(self, loader):
        with pytest.raises(ValueError, match='carafe'):
            loader.design_values({'carafe': [1, 2]})

    def test_logging_options(self, loader):
        data = {'logging': {'file_enabled': True, 'log_dir': './out'}}
        assert loader.logging_options(data) == {'file_enabled': True, 'log_dir': './out'}

    def test_logging_options_missing(self, loader):
        assert loader.logging_options({}) == {}
        assert loader.logging_options({'logging': None}) == {}

    def test_logging_options_wrong_type(self, loader):
        with pytest.raises(ValueError, match='logging'):
            loader.logging_options({'logging': 'verbose'})


# =============================================================================
# TEST APPLY
# =============================================================================

class TestApply:

    def test_apply_full_design(self, loader, param_set, yaml_file):
        values = loader.design_values(load_design(yaml_file))

        result = loader.apply(param_set, values)

        assert result.ok
        assert param_set.snapshot() == {
            K.CARAFE_HEIGHT: 240,
            K.BASE_DIAMETER: 80,
            K.THROAT_DIAMETER: 40,
            K.STOPPER_HEIGHT: 30,
            K.HANDLE_LENGTH: 120,
            K.HANDLE_ANGLE: 45,
        }
        assert result.applied[K.HANDLE_LENGTH] == 120

    def test_dependent_listed_before_driver(self, loader, param_set):
        """handle_length=150 è valido solo dopo carafe_height=240."""
        result = loader.apply(param_set, {'handle_length': 150, 'carafe_height': 240})

        assert result.ok
        assert param_set.get_value(K.HANDLE_LENGTH) == 150
        assert param_set.get_max(K.HANDLE_LENGTH) == 160

    def test_out_of_range_keeps_current_value(self, loader, param_set):
        result = loader.apply(param_set, {'base_diameter': 150, 'handle_angle': 30})

        assert not result.ok
        assert param_set.get_value(K.BASE_DIAMETER) == 50
        assert param_set.get_value(K.HANDLE_ANGLE) == 30

        rejection = result.rejected[0]
        assert rejection == Rejection('base_diameter', 150, REASON_OUT_OF_RANGE, 50.0, 100.0)
        assert K.BASE_DIAMETER not in result.applied

    def test_dependent_checked_against_updated_bound(self, loader, param_set):
        """throat_diameter=90 supera il nuovo massimo 80 (base_diameter)."""
        result = loader.apply(param_set, {'throat_diameter': 90, 'base_diameter': 80})

        assert [r.name for r in result.rejected] == ['throat_diameter']
        assert result.rejected[0].max_value == 80
        assert param_set.get_value(K.THROAT_DIAMETER) == 25

    def test_unknown_name(self, loader, param_set):
        result = loader.apply(param_set, {'lid_height': 20})

        assert result.rejected == [Rejection('lid_height', 20, REASON_UNKNOWN)]
        assert result.applied == {}

    @pytest.mark.parametrize("raw", ['tall', None, True, [1, 2], '(1 / 0)'])
    def test_not_a_number(self, loader, param_set, raw):
        result = loader.apply(param_set, {'carafe_height': raw})

        assert result.rejected[0].reason == REASON_NOT_A_NUMBER
        assert param_set.get_value(K.CARAFE_HEIGHT) == 100

    @pytest.mark.parametrize("raw", [float('nan'), float('inf'), float('-inf'), 'nan'])
    def test_non_finite_is_not_a_number(self, loader, param_set, raw):
        result = loader.apply(param_set, {'handle_angle': _eval_math_expressions(raw)})

        assert [r.reason for r in result.rejected] == [REASON_NOT_A_NUMBER]
        assert param_set.get_value(K.HANDLE_ANGLE) == 0

    def test_duplicate_kind_keeps_first_and_records_second(self, loader, param_set):
        """handle_angle e HANDLE_ANGLE sono lo stesso parametro."""
        result = loader.apply(param_set, {'handle_angle': 30, 'HANDLE_ANGLE': 60})

        assert result.applied == {K.HANDLE_ANGLE: 30}
        assert result.rejected == [Rejection('HANDLE_ANGLE', 60, REASON_DUPLICATE)]
        assert param_set.get_value(K.HANDLE_ANGLE) == 30

    def test_duplicate_rejected_even_if_first_is_invalid(self, loader, param_set):
        result = loader.apply(param_set, {'base_diameter': 500, ' base_diameter ': 80})

        assert [r.reason for r in result.rejected] == [REASON_DUPLICATE, REASON_OUT_OF_RANGE]
        assert param_set.get_value(K.BASE_DIAMETER) == 50

    def test_invalid_value_never_reaches_set_value(self, loader, param_set):
        """is_valid filtra prima: set_value non viene chiamato."""
        with patch.object(param_set, 'set_value', wraps=param_set.set_value) as spy:
            loader.apply(param_set, {'base_diameter': 150, 'handle_angle': 30})

        spy.assert_called_once_with(K.HANDLE_ANGLE, 30.0)

    def test_names_accept_member_form(self, loader, param_set):
        result = loader.apply(param_set, {'HANDLE_ANGLE': 15})

        assert result.applied == {K.HANDLE_ANGLE: 15}

    def test_empty_values(self, loader, param_set):
        result = loader.apply(param_set, {})
        assert result == ApplyResult()
        assert result.ok


# =============================================================================
# TEST REJECTION
# =============================================================================

class TestRejectionStr:

    def test_out_of_range(self):
        text = str(Rejection('base_diameter', 150, REASON_OUT_OF_RANGE, 50.0, 100.0))
        assert text == 'base_diameter: 150 fuori range [50, 100]'

    def test_not_a_number(self):
        assert str(Rejection('carafe_height', 'tall', REASON_NOT_A_NUMBER)) == (
            "carafe_height: 'tall' non è un numero"
        )

    def test_duplicate(self):
        assert str(Rejection('HANDLE_ANGLE', 60, REASON_DUPLICATE)) == (
            'HANDLE_ANGLE: parametro già specificato, valore ignorato'
        )

    def test_unknown(self):
        assert str(Rejection('lid_height', 20, REASON_UNKNOWN)) == 'lid_height: parametro sconosciuto'
