"""
config_loader.py

Ponte tra i dati grezzi (YAML di progetto) e il modello (ParameterSet).

Responsabilità:
1. Caricamento YAML e valutazione di semplici espressioni matematiche
2. Risoluzione dei nomi dei parametri (ParameterKind.from_name)
3. Applicazione dei valori nell'ordine delle dipendenze (driver prima)
4. Politica di revert: un valore rifiutato NON interrompe il caricamento,
   il parametro conserva il valore corrente e il rifiuto viene registrato

Formato:
    carafe:
      carafe_height: 240
      base_diameter: 80
      handle_length: (240 * 2 / 3)
    logging:
      file_enabled: true
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import yaml

from parameters.dependency_rules import dependency_order
from parameters.exceptions import UnknownKindError
from parameters.parameter_kind import ParameterKind
from parameters.parameter_set import ParameterSet

# Chiave YAML che contiene i valori dei parametri
DESIGN_SECTION = 'carafe'
LOGGING_SECTION = 'logging'

# Motivi di rifiuto
REASON_UNKNOWN = 'unknown'
REASON_NOT_A_NUMBER = 'not_a_number'
REASON_OUT_OF_RANGE = 'out_of_range'
REASON_DUPLICATE = 'duplicate'


@dataclass(frozen=True)
class Rejection:
    """
    Un valore di progetto che non è stato applicato.

    Attributes:
        name: Chiave YAML originale
        value: Valore richiesto (grezzo)
        reason: REASON_UNKNOWN | REASON_NOT_A_NUMBER | REASON_OUT_OF_RANGE
            | REASON_DUPLICATE
        min_value / max_value: Range in vigore al momento del rifiuto
            (solo per REASON_OUT_OF_RANGE)
    """
    name: str
    value: Any
    reason: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    def __str__(self):
        if self.reason == REASON_OUT_OF_RANGE:
            return (
                f"{self.name}: {self.value} fuori range "
                f"[{self.min_value:g}, {self.max_value:g}]"
            )
        if self.reason == REASON_NOT_A_NUMBER:
            return f"{self.name}: '{self.value}' non è un numero"
        if self.reason == REASON_DUPLICATE:
            return f"{self.name}: parametro già specificato, valore ignorato"
        return f"{self.name}: parametro sconosciuto"


@dataclass
class ApplyResult:
    """Esito dell'applicazione di un blocco di valori a un ParameterSet."""
    applied: Dict[ParameterKind, float] = field(default_factory=dict)
    rejected: List[Rejection] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.rejected


# =============================================================================
# YAML
# =============================================================================

def _eval_math_expressions(obj):
    """Valuta espressioni matematiche tra parentesi nei valori YAML."""
    if isinstance(obj, dict):
        return {k: _eval_math_expressions(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_eval_math_expressions(item) for item in obj]
    elif isinstance(obj, str):
        pattern = r'\(([0-9+\-*/.() ]+)\)'

        def evaluate_match(match):
            expr = match.group(1)
            try:
                safe_dict = {
                    'abs': abs, 'min': min, 'max': max, 'pow': pow,
                    'pi': math.pi, 'e': math.e
                }
                return str(eval(expr, {"__builtins__": {}}, safe_dict))
            except (SyntaxError, ArithmeticError, TypeError, NameError):
                return match.group(0)

        evaluated = re.sub(pattern, evaluate_match, obj)
        try:
            number = float(evaluated)
        except ValueError:
            return evaluated
        # 'nan', 'inf' restano testo: non sono misure
        return number if math.isfinite(number) else evaluated
    else:
        return obj


def load_design(yaml_path: str) -> dict:
    """
    Carica e parsa un file YAML di progetto.

    Raises:
        FileNotFoundError: se il file non esiste.
        ValueError: se il documento non è una mappa.
    """
    with open(yaml_path, 'r', encoding='utf-8') as f:
        raw_data = yaml.safe_load(f)

    if raw_data is None:
        raw_data = {}
    if not isinstance(raw_data, dict):
        raise ValueError(
            f"File di progetto '{yaml_path}' non valido: atteso un dizionario, "
            f"trovato {type(raw_data).__name__}"
        )
    return _eval_math_expressions(raw_data)


# =============================================================================
# LOADER
# =============================================================================

class DesignLoader:
    """
    Applica i valori di un progetto a un ParameterSet.

    Usage:
        loader = DesignLoader()
        data = load_design('carafe.yml')
        params = ParameterSet()
        result = loader.apply(params, loader.design_values(data))
        for rejection in result.rejected:
            print(rejection)
    """

    @staticmethod
    def design_values(data: Mapping) -> Mapping:
        """Estrae il blocco dei valori ('carafe') dal documento YAML."""
        values = data.get(DESIGN_SECTION, {})
        if values is None:
            return {}
        if not isinstance(values, dict):
            raise ValueError(f"Sezione '{DESIGN_SECTION}' deve essere un dizionario")
        return values

    @staticmethod
    def logging_options(data: Mapping) -> dict:
        """Estrae il blocco 'logging' (kwargs per configure_parameter_logger)."""
        options = data.get(LOGGING_SECTION) or {}
        if not isinstance(options, dict):
            raise ValueError(f"Sezione '{LOGGING_SECTION}' deve essere un dizionario")
        return dict(options)

    def apply(self, parameter_set: ParameterSet, values: Mapping) -> ApplyResult:
        """
        Applica i valori rispettando l'ordine delle dipendenze.

        Un driver viene sempre applicato prima dei suoi dependent, così il
        valore di un dependent viene validato contro il range già aggiornato
        (es. handle_length dopo carafe_height).
        """
        result = ApplyResult()
        resolved: Dict[ParameterKind, Any] = {}
        names: Dict[ParameterKind, str] = {}

        for name, raw in values.items():
            try:
                kind = ParameterKind.from_name(name)
            except UnknownKindError:
                result.rejected.append(Rejection(str(name), raw, REASON_UNKNOWN))
                continue
            if kind in resolved:
                # Vale la prima chiave: le successive vengono registrate e ignorate
                result.rejected.append(Rejection(str(name), raw, REASON_DUPLICATE))
                continue
            resolved[kind] = raw
            names[kind] = str(name)

        for kind in dependency_order(parameter_set.rules):
            if kind not in resolved:
                continue
            self._apply_one(parameter_set, kind, names[kind], resolved[kind], result)

        return result

    @staticmethod
    def _apply_one(
        parameter_set: ParameterSet,
        kind: ParameterKind,
        name: str,
        raw: Any,
        result: ApplyResult
    ) -> None:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            result.rejected.append(Rejection(name, raw, REASON_NOT_A_NUMBER))
            return

        value = float(raw)
        if not math.isfinite(value):
            result.rejected.append(Rejection(name, raw, REASON_NOT_A_NUMBER))
            return

        # Stesso contratto del form: prima is_valid, poi set_value
        if not parameter_set.is_valid(kind, value):
            # Revert: il parametro mantiene il valore corrente
            min_value, max_value = parameter_set.bounds(kind)
            result.rejected.append(Rejection(
                name, raw, REASON_OUT_OF_RANGE, min_value, max_value
            ))
            return

        parameter_set.set_value(kind, value)
        result.applied[kind] = parameter_set.get_value(kind)
