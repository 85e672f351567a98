# tests/conftest.py
import pytest

from parameters.dependency_rules import DependencyRule
from parameters.parameter_kind import ParameterKind
from parameters.parameter_set import ParameterSet
import shared.logger as param_logger


# =============================================================================
# ISOLAMENTO LOGGER
# =============================================================================

@pytest.fixture(autouse=True)
def silent_logger():
    """
    Disabilita il logger dei parametri per ogni test e ne resetta lo stato
    globale alla fine. I test del logger lo riconfigurano esplicitamente.
    """
    param_logger.configure_parameter_logger(enabled=False)
    yield
    param_logger.configure_parameter_logger(
        enabled=True,
        console_enabled=True,
        file_enabled=False,
        log_dir='./logs',
        design_name=None,
        log_cascades=True
    )


# =============================================================================
# FIXTURES PARAMETER SET
# =============================================================================

@pytest.fixture
def param_set():
    """ParameterSet appena costruito (tutti i valori ai minimi)."""
    return ParameterSet()


@pytest.fixture
def tall_carafe(param_set):
    """
    Caraffa alta e larga:
    carafe_height=300, base_diameter=100, handle_length=200, throat_diameter=90.
    """
    param_set.set_value(ParameterKind.CARAFE_HEIGHT, 300)
    param_set.set_value(ParameterKind.BASE_DIAMETER, 100)
    param_set.set_value(ParameterKind.HANDLE_LENGTH, 200)
    param_set.set_value(ParameterKind.THROAT_DIAMETER, 90)
    return param_set


@pytest.fixture
def chain_rules():
    """
    Catena transitiva di test:
    base_diameter -> throat_diameter -> stopper_height (max = throat / 2).
    """
    return [
        DependencyRule(
            driver=ParameterKind.BASE_DIAMETER,
            dependent=ParameterKind.THROAT_DIAMETER,
            recompute=lambda v: v
        ),
        DependencyRule(
            driver=ParameterKind.THROAT_DIAMETER,
            dependent=ParameterKind.STOPPER_HEIGHT,
            recompute=lambda v: v / 2
        ),
        DependencyRule(
            driver=ParameterKind.CARAFE_HEIGHT,
            dependent=ParameterKind.HANDLE_LENGTH,
            recompute=lambda v: round(2 * v / 3, 2)
        ),
    ]


# =============================================================================
# FIXTURES YAML
# =============================================================================

@pytest.fixture
def yaml_content_minimal():
    """Contenuto YAML minimo per un progetto valido."""
    return """
carafe:
  carafe_height: 240
  base_diameter: 80
  throat_diameter: 40
  stopper_height: 30
  handle_length: 120
  handle_angle: 45
"""


@pytest.fixture
def yaml_file(tmp_path, yaml_content_minimal):
    """Crea un file YAML reale su disco in una directory temporanea."""
    p = tmp_path / "test_design.yml"
    p.write_text(yaml_content_minimal, encoding='utf-8')
    return str(p)
