"""
test_utils.py

Test suite per il modulo utils.py.

Coverage:
1. Test format_number - numeri senza zeri finali
"""

import pytest

from shared.utils import format_number


# =============================================================================
# 1. TEST FORMAT_NUMBER
# =============================================================================

class TestFormatNumber:
    """Test per format_number() - usato in report e hint di range."""

    @pytest.mark.parametrize("value, expected", [
        (25.0, '25'),
        (25, '25'),
        (100.0, '100'),
        (66.67, '66.67'),
        (62.5, '62.5'),
        (0.0, '0'),
        (-0.0, '0'),
        (-12.5, '-12.5'),
        (66.666666, '66.67'),
    ])
    def test_default_two_decimals(self, value, expected):
        assert format_number(value) == expected

    def test_custom_decimals(self):
        assert format_number(66.666666, decimals=3) == '66.667'

    def test_zero_decimals(self):
        """Senza punto decimale non si tolgono zeri significativi."""
        assert format_number(100.0, decimals=0) == '100'
        assert format_number(250.4, decimals=0) == '250'

    def test_tiny_negative_rounds_to_zero(self):
        assert format_number(-0.001) == '0'
