"""
parameter_set.py

Aggregato dei parametri della caraffa: un Parameter per ogni ParameterKind
più le regole che ricalcolano i bounds dipendenti.

Combina:
- parameter_definitions.py: Sa QUALI SONO i limiti assoluti
- dependency_rules.py: Sa CHI influenza CHI
- parameter.py: Sa COME si clampa un singolo valore

Invariante: prima e dopo ogni chiamata pubblica, per ogni kind
    get_min(kind) <= get_value(kind) <= get_max(kind)
e ogni massimo derivato riflette il valore CORRENTE del suo driver.

Il ParameterSet non è thread-safe: chi lo condivide tra thread deve
serializzare le chiamate a set_value (un lock per istanza).
"""

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from parameters.dependency_rules import (
    DEPENDENCY_RULES,
    DependencyRule,
    build_cascade_table,
    dependency_order,
)
from parameters.exceptions import OutOfRangeError, UnknownKindError
from parameters.parameter import Parameter
from parameters.parameter_definitions import CARAFE_PARAMETERS, ParameterBounds
from parameters.parameter_kind import ParameterKind
from shared.logger import log_cascade, log_commit, log_rejection

KindInput = Union[ParameterKind, str]


class ParameterSet:
    """
    Motore di vincoli e propagazione.

    Usage:
        params = ParameterSet()
        params.set_value(ParameterKind.CARAFE_HEIGHT, 240)
        params.get_max(ParameterKind.HANDLE_LENGTH)   # -> 160.0

    Lettura: get_min / get_max / get_value / is_valid / snapshot.
    Scrittura: SOLO set_value (atomica: valore e cascata, oppure niente).
    """

    def __init__(
        self,
        rules: Optional[Iterable[DependencyRule]] = None,
        definitions: Optional[Mapping[ParameterKind, ParameterBounds]] = None
    ):
        """
        Args:
            rules: Regole di dipendenza (default: DEPENDENCY_RULES).
            definitions: Bounds assoluti per kind (default: CARAFE_PARAMETERS).

        Raises:
            CyclicDependencyError: se le regole formano un ciclo.
            ValueError: se definitions non copre tutti i ParameterKind o un
                massimo derivato non ha una regola che lo calcoli.
        """
        self._rules: Tuple[DependencyRule, ...] = tuple(
            DEPENDENCY_RULES if rules is None else rules
        )
        self._definitions = dict(CARAFE_PARAMETERS if definitions is None else definitions)

        missing = [k.value for k in ParameterKind if k not in self._definitions]
        if missing:
            raise ValueError(f"Bounds mancanti per i parametri: {missing}")

        # Fail fast sui cicli: calcolato una volta, riusato a ogni set_value
        self._cascades: Dict[ParameterKind, List[DependencyRule]] = build_cascade_table(self._rules)
        self._parameters: Dict[ParameterKind, Parameter] = self._build_initial_parameters()

    # =========================================================================
    # LETTURA
    # =========================================================================

    def get_min(self, kind: KindInput) -> float:
        return self._get(kind).min_value

    def get_max(self, kind: KindInput) -> float:
        return self._get(kind).max_value

    def get_value(self, kind: KindInput) -> float:
        return self._get(kind).value

    def bounds(self, kind: KindInput) -> Tuple[float, float]:
        """Ritorna (min, max) correnti del parametro."""
        param = self._get(kind)
        return param.min_value, param.max_value

    def definition(self, kind: KindInput) -> ParameterBounds:
        """Bounds assoluti (e unità) con cui è stato costruito questo set."""
        return self._definitions[self._resolve(kind)]

    def get_parameter(self, kind: KindInput) -> Parameter:
        """Copia del Parameter: modificarla non tocca il ParameterSet."""
        return self._get(kind).copy()

    def is_valid(self, kind: KindInput, value: float) -> bool:
        """True se get_min(kind) <= value <= get_max(kind). Nessuna mutazione."""
        return self._get(kind).contains(value)

    def snapshot(self) -> Dict[ParameterKind, float]:
        """Valore corrente di ogni parametro, letto una sola volta per kind."""
        return {kind: self._parameters[kind].value for kind in ParameterKind}

    @property
    def rules(self) -> Tuple[DependencyRule, ...]:
        return self._rules

    def kinds(self) -> List[ParameterKind]:
        return list(ParameterKind)

    # =========================================================================
    # SCRITTURA
    # =========================================================================

    def set_value(self, kind: KindInput, new_value: float) -> None:
        """
        Assegna un nuovo valore e propaga ai parametri dipendenti.

        1. Validazione contro il range CORRENTE (estremi inclusi)
        2. Commit del valore
        3. Cascata: ricalcolo del massimo di ogni dependent raggiunto,
           in ordine topologico, e re-clamp del suo valore

        La cascata lavora su copie e viene pubblicata solo alla fine:
        chi legge non vede mai un valore senza i bounds aggiornati.

        Raises:
            OutOfRangeError: valore fuori range (nessuna mutazione).
            UnknownKindError: kind non riconosciuto.
        """
        kind = self._resolve(kind)
        target = self._parameters[kind]
        new_value = float(new_value)

        if not target.contains(new_value):
            log_rejection(kind, new_value, target.min_value, target.max_value)
            raise OutOfRangeError(kind, new_value, target.min_value, target.max_value)

        old_value = target.value
        staged: Dict[ParameterKind, Parameter] = {kind: target.copy()}
        staged[kind].value = new_value

        for rule in self._cascades[kind]:
            driver = staged[rule.driver] if rule.driver in staged else self._parameters[rule.driver]
            if rule.dependent not in staged:
                staged[rule.dependent] = self._parameters[rule.dependent].copy()
            dependent = staged[rule.dependent]

            old_max, old_dep_value = dependent.max_value, dependent.value
            dependent.max_value = rule.recompute(driver.value)
            self._adjust_value(dependent)

            log_cascade(
                rule.driver, rule.dependent,
                old_max, dependent.max_value,
                old_dep_value, dependent.value
            )

        self._parameters.update(staged)
        log_commit(kind, old_value, new_value)

    def reset(self) -> None:
        """Riporta tutti i parametri allo stato iniziale (minimi)."""
        self._parameters = self._build_initial_parameters()

    # =========================================================================
    # INTERNAL METHODS
    # =========================================================================

    def _build_initial_parameters(self) -> Dict[ParameterKind, Parameter]:
        """
        Ogni parametro parte dal suo minimo assoluto. I massimi derivati sono
        calcolati dal MINIMO del driver, quindi lo stato iniziale è coerente
        prima di qualsiasi input.
        """
        incoming: Dict[ParameterKind, List[DependencyRule]] = {}
        for rule in self._rules:
            incoming.setdefault(rule.dependent, []).append(rule)

        parameters: Dict[ParameterKind, Parameter] = {}
        for kind in dependency_order(self._rules):
            bounds = self._definitions[kind]
            max_val = bounds.max_val

            for rule in incoming.get(kind, []):
                max_val = rule.recompute(parameters[rule.driver].min_value)

            if max_val is None:
                raise ValueError(
                    f"Parametro '{kind.value}': massimo derivato senza regola di dipendenza"
                )
            parameters[kind] = Parameter(bounds.min_val, max_val, bounds.min_val)

        # Ordine di dichiarazione dell'enum per iterazioni prevedibili
        return {kind: parameters[kind] for kind in ParameterKind}

    @staticmethod
    def _adjust_value(param: Parameter) -> None:
        """Riporta il valore nel range dopo un cambio di bounds (entrambi i lati)."""
        if param.value > param.max_value:
            param.value = param.max_value
        elif param.value < param.min_value:
            param.value = param.min_value

    def _resolve(self, kind: KindInput) -> ParameterKind:
        resolved = ParameterKind.from_name(kind)
        if resolved not in self._parameters:
            raise UnknownKindError(kind)
        return resolved

    def _get(self, kind: KindInput) -> Parameter:
        return self._parameters[self._resolve(kind)]

    # =========================================================================
    # PROTOCOLLI
    # =========================================================================

    def __iter__(self) -> Iterator[ParameterKind]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __contains__(self, kind) -> bool:
        try:
            self._resolve(kind)
        except UnknownKindError:
            return False
        return True

    def __repr__(self):
        values = ', '.join(f"{k.value}={p.value:g}" for k, p in self._parameters.items())
        return f"<ParameterSet {values}>"
