"""
parameter_definitions.py

Questo modulo agisce come REGISTRY (Registro) centrale per le definizioni dei parametri.
Contiene i limiti ASSOLUTI (Bounds) per ogni grandezza della caraffa.

Design Pattern:
- Value Object: La classe ParameterBounds è immutabile.
- Registry: Il dizionario CARAFE_PARAMETERS centralizza la configurazione.

Qui definiamo COSA sono i parametri, non COME si influenzano a vicenda
(quello è compito di dependency_rules.py).
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from parameters.parameter_kind import ParameterKind


@dataclass(frozen=True)
class ParameterBounds:
    """
    Definisce i limiti assoluti di un parametro.

    Attributes:
        min_val (float): Valore minimo assoluto (anche valore iniziale).
        max_val (float | None): Valore massimo assoluto. None se il massimo
            è DERIVATO dal valore di un altro parametro (vedi dependency_rules).
        unit (str): Unità di misura, usata solo dai report.
    """
    min_val: float
    max_val: Optional[float] = None
    unit: str = 'mm'

    @property
    def is_derived(self) -> bool:
        """True se il massimo viene calcolato da una regola di dipendenza."""
        return self.max_val is None


# =============================================================================
# SYSTEM CONSTANTS
# =============================================================================
# Le due regole di dipendenza e i report dipendono da questi numeri.

MIN_CARAFE_HEIGHT = 100.0
MAX_CARAFE_HEIGHT = 300.0

MIN_BASE_DIAMETER = 50.0
MAX_BASE_DIAMETER = 100.0

MIN_THROAT_DIAMETER = 25.0      # max = valore corrente di BASE_DIAMETER

MIN_STOPPER_HEIGHT = 10.0
MAX_STOPPER_HEIGHT = 50.0

MIN_HANDLE_LENGTH = 25.0        # max = round(2/3 * CARAFE_HEIGHT, 2)

MIN_HANDLE_ANGLE = 0.0
MAX_HANDLE_ANGLE = 90.0

# =============================================================================
# PARAMETER REGISTRY
# =============================================================================
# Se aggiungi un nuovo ParameterKind, devi aggiungerlo qui.

CARAFE_PARAMETERS: Dict[ParameterKind, ParameterBounds] = {

    # =========================================================================
    # CORPO
    # =========================================================================
    ParameterKind.CARAFE_HEIGHT: ParameterBounds(
        min_val=MIN_CARAFE_HEIGHT,
        max_val=MAX_CARAFE_HEIGHT
    ),

    ParameterKind.BASE_DIAMETER: ParameterBounds(
        min_val=MIN_BASE_DIAMETER,
        max_val=MAX_BASE_DIAMETER
    ),

    ParameterKind.THROAT_DIAMETER: ParameterBounds(
        min_val=MIN_THROAT_DIAMETER
        # max derivato: il collo non può essere più largo della base
    ),

    # =========================================================================
    # TAPPO
    # =========================================================================
    ParameterKind.STOPPER_HEIGHT: ParameterBounds(
        min_val=MIN_STOPPER_HEIGHT,
        max_val=MAX_STOPPER_HEIGHT
    ),

    # =========================================================================
    # MANICO
    # =========================================================================
    ParameterKind.HANDLE_LENGTH: ParameterBounds(
        min_val=MIN_HANDLE_LENGTH
        # max derivato: al massimo 2/3 dell'altezza del corpo
    ),

    ParameterKind.HANDLE_ANGLE: ParameterBounds(
        min_val=MIN_HANDLE_ANGLE,
        max_val=MAX_HANDLE_ANGLE,
        unit='°'
    ),
}


def get_parameter_definition(kind: Union[ParameterKind, str]) -> ParameterBounds:
    """
    Recupera la definizione di un parametro dal registro.

    Args:
        kind: Il ParameterKind o il suo nome (es. 'carafe_height')

    Returns:
        ParameterBounds: L'oggetto configurazione.

    Raises:
        UnknownKindError: Se il parametro non esiste nel registro.
    """
    resolved = ParameterKind.from_name(kind)
    if resolved not in CARAFE_PARAMETERS:
        from parameters.exceptions import UnknownKindError
        raise UnknownKindError(kind)
    return CARAFE_PARAMETERS[resolved]
