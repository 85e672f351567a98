# src/rendering/range_report.py
"""
RangeReportWriter: riepilogo testuale di un ParameterSet.
Per ogni parametro: valore corrente e suggerimento di range
"(min: 25 | max: 50 mm)", seguiti dagli eventuali valori rifiutati.
"""
from typing import Iterable, List

from engine.config_loader import Rejection
from parameters.parameter_kind import ParameterKind
from parameters.parameter_set import ParameterSet
from shared.utils import format_number


def format_range_hint(parameter_set: ParameterSet, kind: ParameterKind, unit: str = None) -> str:
    """
    Testo del range corrente, es. "(min: 25 | max: 50 mm)".

    Args:
        unit: unità di misura; None = quella dei bounds del parameter_set
    """
    if unit is None:
        unit = parameter_set.definition(kind).unit
    low, high = parameter_set.bounds(kind)
    separator = '' if unit == '°' else ' '
    return f"(min: {format_number(low)} | max: {format_number(high)}{separator}{unit})"


class RangeReportWriter:
    """
    Scrive il riepilogo dei parametri su file o stringa.

    Responsabilita:
    - Intestazione con sorgente del progetto
    - Una riga per parametro (valore + range)
    - Sezione dei valori rifiutati (revert)
    """

    LINE_WIDTH = 77

    def render(
        self,
        parameter_set: ParameterSet,
        rejections: Iterable[Rejection] = (),
        design_source: str = None
    ) -> str:
        """Ritorna il report completo come stringa."""
        lines: List[str] = []
        lines.extend(self._header(design_source))
        lines.extend(self._parameter_lines(parameter_set))
        lines.extend(self._rejection_lines(list(rejections)))
        return '\n'.join(lines) + '\n'

    def write(
        self,
        parameter_set: ParameterSet,
        filepath: str,
        rejections: Iterable[Rejection] = (),
        design_source: str = None
    ):
        """
        Scrive il report su file.

        Args:
            filepath: percorso file output
            rejections: valori rifiutati durante il caricamento
            design_source: path file YAML sorgente (per header)
        """
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(self.render(parameter_set, rejections, design_source))

    # =========================================================================
    # SEZIONI
    # =========================================================================

    def _header(self, design_source: str = None) -> List[str]:
        lines = ["# " + "=" * self.LINE_WIDTH, "# CARAFE PARAMETERS"]
        if design_source:
            lines.append(f"# Generated from: {design_source}")
        lines.append("# " + "=" * self.LINE_WIDTH)
        lines.append("")
        return lines

    def _parameter_lines(self, parameter_set: ParameterSet) -> List[str]:
        lines = []
        for kind in parameter_set:
            value = format_number(parameter_set.get_value(kind))
            hint = format_range_hint(parameter_set, kind)
            lines.append(f"{kind.label:<18} {value:>8}  {hint}")
        return lines

    def _rejection_lines(self, rejections: List[Rejection]) -> List[str]:
        if not rejections:
            return []
        lines = ["", f"# Rejected values ({len(rejections)})"]
        lines.extend(f"  - {rejection}" for rejection in rejections)
        return lines
