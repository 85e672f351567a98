"""
exceptions.py

Errori tipizzati del motore dei parametri.

Tutti ereditano da ParameterError e anche dall'eccezione built-in più vicina
(ValueError, KeyError, RuntimeError), così il codice chiamante che già cattura
quelle continua a funzionare.
"""

from typing import Any, Sequence


class ParameterError(Exception):
    """Base per tutti gli errori del motore dei parametri."""


class OutOfRangeError(ParameterError, ValueError):
    """
    Valore richiesto fuori dal range CORRENTE di un parametro.

    Sollevato solo da ParameterSet.set_value. Nessuna mutazione è avvenuta:
    il chiamante può riprovare con un altro valore.
    """

    def __init__(self, kind: Any, value: float, min_value: float, max_value: float):
        self.kind = kind
        self.value = value
        self.min_value = min_value
        self.max_value = max_value
        name = getattr(kind, 'value', kind)
        super().__init__(
            f"Valore {value} fuori dal range consentito per '{name}': "
            f"[{min_value}, {max_value}]"
        )


class UnknownKindError(ParameterError, KeyError):
    """Kind non appartenente all'enumerazione ParameterKind."""

    def __init__(self, kind: Any):
        from parameters.parameter_kind import ParameterKind

        self.kind = kind
        available = ', '.join(k.value for k in ParameterKind)
        super().__init__(
            f"Parametro '{kind}' non definito. Disponibili: {available}"
        )

    def __str__(self) -> str:
        # KeyError.__str__ aggiungerebbe le virgolette attorno al messaggio
        return str(self.args[0])


class CyclicDependencyError(ParameterError, RuntimeError):
    """
    La tabella delle dipendenze contiene un ciclo.

    È un errore di programmazione nella tabella, non una condizione utente.
    """

    def __init__(self, cycle: Sequence[Any]):
        self.cycle = tuple(cycle)
        path = ' -> '.join(str(getattr(k, 'value', k)) for k in self.cycle)
        super().__init__(f"Dipendenza ciclica tra parametri: {path}")
