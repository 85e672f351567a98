# =============================================================================
# RANGE VISUALIZER - Grafico dei range correnti dei parametri
# =============================================================================

import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
import numpy as np

from shared.utils import format_number


class RangeVisualizer:
    """
    Visualizzatore dei range di un ParameterSet.

    Genera una barra orizzontale per parametro dove:
    - Asse X: posizione normalizzata nel range assoluto del parametro
    - Barra: range CORRENTE [min, max] (si restringe con le dipendenze)
    - Marker: valore corrente
    - Colore barra: 'derived_color' se il massimo è calcolato da una regola
    """

    def __init__(self, parameter_set, config=None):
        """
        Args:
            parameter_set: ParameterSet da visualizzare
            config: dict di configurazione (opzionale)
        """
        self.parameter_set = parameter_set

        default_config = {
            'figsize': (8, 4.5),
            'title': 'Carafe parameters',
            'bar_color': 'steelblue',
            'derived_color': '#f4a261',
            'bar_alpha': 0.6,
            'value_color': 'black',
            'label_fontsize': 8,
            'title_fontsize': 12,
            'dpi': 150,
        }
        self.config = {**default_config, **(config or {})}

    # =========================================================================
    # DATI
    # =========================================================================

    def _scale(self, kind):
        """Estremi assoluti usati per normalizzare la barra del parametro."""
        bounds = self.parameter_set.definition(kind)
        low = bounds.min_val
        high = bounds.max_val
        if high is None:
            # Massimo derivato: la scala segue il massimo corrente
            high = self.parameter_set.get_max(kind)
        if high <= low:
            high = low + 1.0
        return low, high

    def normalized_ranges(self):
        """
        Ritorna (kinds, starts, widths, values) normalizzati in [0, 1].
        """
        kinds = list(self.parameter_set)
        starts, widths, values = [], [], []
        for kind in kinds:
            low, high = self._scale(kind)
            span = high - low
            cur_min, cur_max = self.parameter_set.bounds(kind)
            starts.append((cur_min - low) / span)
            widths.append((cur_max - cur_min) / span)
            values.append((self.parameter_set.get_value(kind) - low) / span)
        return kinds, np.array(starts), np.array(widths), np.array(values)

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render(self):
        """Crea e ritorna la figura matplotlib."""
        kinds, starts, widths, values = self.normalized_ranges()
        y = np.arange(len(kinds))

        colors = [
            self.config['derived_color']
            if self.parameter_set.definition(kind).is_derived
            else self.config['bar_color']
            for kind in kinds
        ]

        fig, ax = plt.subplots(figsize=self.config['figsize'])
        ax.barh(y, widths, left=starts, color=colors,
                alpha=self.config['bar_alpha'], height=0.5)
        ax.scatter(values, y, color=self.config['value_color'], zorder=3, marker='|', s=300)

        for idx, kind in enumerate(kinds):
            cur_min, cur_max = self.parameter_set.bounds(kind)
            ax.annotate(
                f"{format_number(self.parameter_set.get_value(kind))} "
                f"[{format_number(cur_min)}, {format_number(cur_max)}]",
                xy=(1.02, y[idx]), xycoords=('axes fraction', 'data'),
                va='center', fontsize=self.config['label_fontsize']
            )

        ax.set_yticks(y)
        ax.set_yticklabels([kind.label for kind in kinds], fontsize=self.config['label_fontsize'])
        ax.set_xlim(0, 1)
        ax.invert_yaxis()
        ax.set_xlabel('Posizione nel range assoluto')
        ax.set_title(self.config['title'], fontsize=self.config['title_fontsize'])
        fig.tight_layout()
        return fig

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def export(self, output_path):
        """
        Esporta il grafico. Il formato segue l'estensione:
        .pdf -> PdfPages, altrimenti savefig (png, svg, ...).
        """
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        fig = self.render()
        try:
            if output_path.lower().endswith('.pdf'):
                with PdfPages(output_path) as pdf:
                    pdf.savefig(fig, dpi=self.config['dpi'])
            else:
                fig.savefig(output_path, dpi=self.config['dpi'], bbox_inches='tight')
        finally:
            plt.close(fig)

        print(f"✓ Grafico esportato: {output_path}")
        return output_path
