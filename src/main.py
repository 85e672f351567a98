import os

from engine.config_loader import DesignLoader, load_design
from parameters.parameter_set import ParameterSet
from rendering.range_report import RangeReportWriter
from shared.logger import configure_parameter_logger, get_parameter_log_path
# =============================================================================
# MAIN
# =============================================================================

DEFAULT_REPORT_FILE = 'report.txt'
VISUALIZE_FLAGS = ('--visualize', '-v')


def main():
    import sys

    positional = [arg for arg in sys.argv[1:] if not arg.startswith('-')]
    flags = [arg for arg in sys.argv[1:] if arg.startswith('-')]

    # Verifica argomenti
    if len(positional) < 1:
        print("Uso: python main.py <design.yml> [report.txt] [--visualize|-v]")
        sys.exit(1)

    yaml_file = positional[0]
    output_file = positional[1] if len(positional) > 1 else DEFAULT_REPORT_FILE
    visualize = any(flag in VISUALIZE_FLAGS for flag in flags)

    try:
        # Carica YAML
        print(f"Caricamento {yaml_file}...")
        data = load_design(yaml_file)
        loader = DesignLoader()

        # Logger: file nominato come il progetto, sovrascrivibile dal blocco 'logging'
        design_name = os.path.splitext(os.path.basename(yaml_file))[0]
        configure_parameter_logger(**{'design_name': design_name, **loader.logging_options(data)})

        # Applica i valori
        print("Applicazione parametri...")
        parameter_set = ParameterSet()
        result = loader.apply(parameter_set, loader.design_values(data))

        # Report
        RangeReportWriter().write(parameter_set, output_file, result.rejected, yaml_file)
        print(f"✓ Report scritto: {output_file}")
        print(f"  - {len(result.applied)} valori applicati")
        if result.rejected:
            print(f"  - {len(result.rejected)} valori rifiutati (mantenuto il valore corrente)")
            for rejection in result.rejected:
                print(f"      {rejection}")

        log_path = get_parameter_log_path()
        if log_path:
            print(f"📝 Log parametri: {log_path}")

        if visualize:
            from rendering.range_visualizer import RangeVisualizer
            pdf_path = os.path.splitext(output_file)[0] + '.pdf'
            RangeVisualizer(parameter_set).export(pdf_path)

        print("\n✓ Completato!")

    except FileNotFoundError:
        print(f"✗ Errore: file '{yaml_file}' non trovato")
        sys.exit(1)
    except Exception as e:
        print(f"✗ Errore: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
