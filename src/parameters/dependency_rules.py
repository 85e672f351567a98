"""
dependency_rules.py

Registry DICHIARATIVO delle dipendenze tra parametri.

Ogni regola dice: "il VALORE di driver determina il MASSIMO di dependent".
ParameterSet non conosce le regole una per una: dopo ogni commit applica,
in ordine topologico, tutte le regole raggiungibili dal parametro modificato.

Design Pattern:
- Registry Pattern: Lista centralizzata di regole
- Data-Driven Configuration: Descrivi COSA, non COME

Per aggiungere una dipendenza:
1. Scrivi la funzione di ricalcolo (valore driver -> nuovo massimo)
2. Aggiungi una DependencyRule qui sotto (o usa register_dependency_rule)
Fine! Cascata e ordinamento sono automatici.
"""

from dataclasses import dataclass
from graphlib import CycleError, TopologicalSorter
from typing import Callable, Dict, Iterable, List

from parameters.exceptions import CyclicDependencyError
from parameters.parameter_kind import ParameterKind


@dataclass(frozen=True)
class DependencyRule:
    """
    Regola di dipendenza tra due parametri.

    Attributes:
        driver: Parametro il cui valore guida il ricalcolo.
        dependent: Parametro il cui massimo viene ricalcolato.
        recompute: Funzione valore_driver -> nuovo massimo del dependent.
        description: Testo libero per log e report.
    """
    driver: ParameterKind
    dependent: ParameterKind
    recompute: Callable[[float], float]
    description: str = ''


# =============================================================================
# FUNZIONI DI RICALCOLO
# =============================================================================

def max_throat_diameter(base_diameter: float) -> float:
    """Il collo non può essere più largo della base."""
    return base_diameter


def max_handle_length(carafe_height: float) -> float:
    """Il manico non può superare i 2/3 dell'altezza del corpo."""
    return round(2 * carafe_height / 3, 2)


# =============================================================================
# REGISTRY
# =============================================================================

DEPENDENCY_RULES: List[DependencyRule] = [
    DependencyRule(
        driver=ParameterKind.BASE_DIAMETER,
        dependent=ParameterKind.THROAT_DIAMETER,
        recompute=max_throat_diameter,
        description='throat_diameter <= base_diameter'
    ),
    DependencyRule(
        driver=ParameterKind.CARAFE_HEIGHT,
        dependent=ParameterKind.HANDLE_LENGTH,
        recompute=max_handle_length,
        description='handle_length <= 2/3 carafe_height'
    ),
]


# =============================================================================
# ORDINAMENTO
# =============================================================================

def dependency_order(rules: Iterable[DependencyRule]) -> List[ParameterKind]:
    """
    Ordina TUTTI i ParameterKind in modo che ogni driver preceda i suoi
    dependent. A parità, vale l'ordine di dichiarazione dell'enum.

    Raises:
        CyclicDependencyError: se le regole formano un ciclo.
    """
    position = {kind: i for i, kind in enumerate(ParameterKind)}

    sorter = TopologicalSorter()
    for kind in ParameterKind:
        sorter.add(kind)
    for rule in rules:
        sorter.add(rule.dependent, rule.driver)

    try:
        sorter.prepare()
    except CycleError as e:
        raise CyclicDependencyError(e.args[1]) from e

    order: List[ParameterKind] = []
    while sorter.is_active():
        ready = sorted(sorter.get_ready(), key=position.__getitem__)
        order.extend(ready)
        sorter.done(*ready)
    return order


def affected_rules(
    kind: ParameterKind,
    rules: Iterable[DependencyRule]
) -> List[DependencyRule]:
    """
    Tutte le regole raggiunte (anche transitivamente) modificando kind,
    ordinate in modo che un driver sia ricalcolato prima dei suoi dependent.
    """
    rules = list(rules)
    index = {k: i for i, k in enumerate(dependency_order(rules))}

    by_driver: Dict[ParameterKind, List[DependencyRule]] = {}
    for rule in rules:
        by_driver.setdefault(rule.driver, []).append(rule)

    reached = {kind}
    pending = [kind]
    selected: List[DependencyRule] = []
    while pending:
        current = pending.pop()
        for rule in by_driver.get(current, []):
            selected.append(rule)
            if rule.dependent not in reached:
                reached.add(rule.dependent)
                pending.append(rule.dependent)

    return sorted(selected, key=lambda r: (index[r.driver], index[r.dependent]))


def build_cascade_table(
    rules: Iterable[DependencyRule]
) -> Dict[ParameterKind, List[DependencyRule]]:
    """
    Precalcola, per ogni kind, la lista ordinata delle regole da applicare.

    Raises:
        CyclicDependencyError: se le regole formano un ciclo (fail fast).
    """
    rules = list(rules)
    dependency_order(rules)
    return {kind: affected_rules(kind, rules) for kind in ParameterKind}


# =============================================================================
# FUNZIONI DI REGISTRAZIONE (per estensibilità)
# =============================================================================

def register_dependency_rule(
    rule: DependencyRule,
    rules: List[DependencyRule] = DEPENDENCY_RULES
) -> None:
    """
    Registra una nuova regola di dipendenza.

    Il grafo esteso viene validato PRIMA dell'inserimento: se la regola
    chiuderebbe un ciclo, il registro resta invariato.

    Raises:
        CyclicDependencyError: se la regola introduce un ciclo.
    """
    dependency_order([*rules, rule])
    rules.append(rule)
