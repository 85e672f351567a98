"""
parameter.py

Definisce la classe Parameter (Model): una grandezza numerica limitata.

Incapsula minimo, massimo e valore corrente, garantendo sempre
    min_value <= value <= max_value
Le scritture interne non falliscono MAI: un valore fuori range viene
clampato in silenzio al bound più vicino (la validazione che rifiuta
l'input dell'utente vive in ParameterSet.set_value).
"""

from shared.logger import log_clamp


class Parameter:
    """
    Grandezza numerica con bounds e clamp-on-write.

    - min_value: fisso dopo la costruzione (sola lettura).
    - max_value: modificabile, ma mai sotto min_value.
    - value: modificabile, sempre clampato in [min_value, max_value].
    """

    __slots__ = ('_min_value', '_max_value', '_value')

    def __init__(self, min_value: float, max_value: float, value: float):
        # Bounds invertiti: il più piccolo diventa il minimo
        if min_value > max_value:
            min_value, max_value = max_value, min_value

        self._min_value = float(min_value)
        self._max_value = float(max_value)
        self._value = self._min_value
        self.value = value

    # =========================================================================
    # PROPRIETÀ
    # =========================================================================

    @property
    def min_value(self) -> float:
        return self._min_value

    @property
    def max_value(self) -> float:
        return self._max_value

    @max_value.setter
    def max_value(self, new_max: float):
        """Un massimo sotto il minimo viene riportato al minimo. Non tocca value."""
        self._max_value = max(float(new_max), self._min_value)

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, new_value: float):
        new_value = float(new_value)
        clamped = max(self._min_value, min(new_value, self._max_value))
        if clamped != new_value:
            log_clamp(new_value, clamped, self._min_value, self._max_value)
        self._value = clamped

    # =========================================================================
    # HELPERS
    # =========================================================================

    def contains(self, value: float) -> bool:
        """True se value è nel range [min_value, max_value] (estremi inclusi)."""
        return self._min_value <= value <= self._max_value

    def copy(self) -> 'Parameter':
        """Copia indipendente con gli stessi tre attributi."""
        clone = Parameter.__new__(Parameter)
        clone._min_value = self._min_value
        clone._max_value = self._max_value
        clone._value = self._value
        return clone

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return (
            self._min_value == other._min_value
            and self._max_value == other._max_value
            and self._value == other._value
        )

    def __repr__(self):
        """Rappresentazione stringa per debug."""
        return (
            f"<Parameter {self._value:.2f} "
            f"[{self._min_value:.2f}, {self._max_value:.2f}]>"
        )
