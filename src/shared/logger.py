# =============================================================================
# logger.py - Gestione logging per commit, rifiuti e cascate dei parametri
# =============================================================================
import logging
from datetime import datetime
import os

# =============================================================================
# CONFIGURAZIONE
# =============================================================================
PARAMETER_LOG_CONFIG = {
    'enabled': True,                    # Master switch: False disabilita tutto
    'console_enabled': True,            # Stampa su terminale (solo WARNING+)
    'file_enabled': False,              # Scrive su file
    'log_dir': './logs',                # Directory per i file di log
    'design_name': None,                # None = auto-genera con timestamp
    'log_cascades': True,               # Logga i ricalcoli dei bounds dipendenti
}

LOGGER_NAME = 'carafe_parameters'

_parameter_logger = None
_parameter_logger_initialized = False


# =============================================================================
# FUNZIONI PUBBLICHE
# =============================================================================

def configure_parameter_logger(
    enabled=True,
    console_enabled=True,
    file_enabled=False,
    log_dir='./logs',
    design_name=None,
    log_cascades=True
):
    """
    Configura il logger dei parametri.
    Chiamare PRIMA di creare qualsiasi ParameterSet.

    Args:
        enabled: Master switch - se False, nessun logging
        console_enabled: Se True, stampa i warning su terminale
        file_enabled: Se True, scrive su file
        log_dir: Directory dove salvare i file di log
        design_name: Nome del file YAML di progetto (senza path, senza estensione)
                     Il file sarà: parameters_{design_name}.log
        log_cascades: Se True, logga i ricalcoli dei bounds dipendenti
    """
    global _parameter_logger, _parameter_logger_initialized

    PARAMETER_LOG_CONFIG['enabled'] = enabled
    PARAMETER_LOG_CONFIG['console_enabled'] = console_enabled
    PARAMETER_LOG_CONFIG['file_enabled'] = file_enabled
    PARAMETER_LOG_CONFIG['log_dir'] = log_dir
    PARAMETER_LOG_CONFIG['design_name'] = design_name
    PARAMETER_LOG_CONFIG['log_cascades'] = log_cascades

    # Chiudi gli handler del logger precedente prima del reset
    _close_handlers()
    _parameter_logger = None
    _parameter_logger_initialized = False


def get_parameter_logger():
    """
    Ottiene il logger dei parametri (lazy initialization).
    Rispetta la configurazione in PARAMETER_LOG_CONFIG.

    Returns:
        logging.Logger o None se disabilitato
    """
    global _parameter_logger, _parameter_logger_initialized

    # Se già inizializzato, ritorna (anche se None)
    if _parameter_logger_initialized:
        return _parameter_logger

    _parameter_logger_initialized = True

    # Master switch
    if not PARAMETER_LOG_CONFIG['enabled']:
        _parameter_logger = None
        return None

    # Se né console né file sono abilitati, disabilita
    if not PARAMETER_LOG_CONFIG['console_enabled'] and not PARAMETER_LOG_CONFIG['file_enabled']:
        _parameter_logger = None
        return None

    _parameter_logger = logging.getLogger(LOGGER_NAME)
    _parameter_logger.setLevel(logging.DEBUG)
    _parameter_logger.propagate = False
    _parameter_logger.handlers = []  # Pulisci handler esistenti

    # === FILE HANDLER ===
    if PARAMETER_LOG_CONFIG['file_enabled']:
        log_dir = PARAMETER_LOG_CONFIG['log_dir']

        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        if PARAMETER_LOG_CONFIG.get('design_name'):
            log_filename = f"parameters_{PARAMETER_LOG_CONFIG['design_name']}.log"
        else:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_filename = f'parameters_{timestamp}.log'

        log_path = os.path.join(log_dir, log_filename)

        file_handler = logging.FileHandler(log_path, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-7s | %(message)s',
            datefmt='%H:%M:%S'
        ))
        _parameter_logger.addHandler(file_handler)

    # === CONSOLE HANDLER ===
    if PARAMETER_LOG_CONFIG['console_enabled']:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('⚠️  PARAM: %(message)s'))
        _parameter_logger.addHandler(console_handler)

    return _parameter_logger


def get_parameter_log_path():
    """
    Ritorna il percorso del file di log corrente (se esiste).

    Returns:
        str o None
    """
    if _parameter_logger is None:
        return None

    for handler in _parameter_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler.baseFilename
    return None


def log_rejection(kind, value, min_val, max_val):
    """
    Logga un valore rifiutato da ParameterSet.set_value.

    Args:
        kind: ParameterKind (o nome) del parametro
        value: valore richiesto
        min_val: limite minimo corrente
        max_val: limite massimo corrente
    """
    logger = get_parameter_logger()

    if logger is None:
        return

    if value < min_val:
        deviation = value - min_val
        bound_type = "MIN"
        bound_value = min_val
    else:
        deviation = value - max_val
        bound_type = "MAX"
        bound_value = max_val

    logger.warning(
        f"[REJECT] {_name(kind):<16} | "
        f"raw={value:>10.3f} | "
        f"{bound_type}={bound_value:>9.3f} | "
        f"Δ={deviation:>+9.3f}"
    )


def log_commit(kind, old_value, new_value):
    """Logga un valore accettato e committato."""
    logger = get_parameter_logger()

    if logger is None:
        return

    logger.info(
        f"[SET]    {_name(kind):<16} | "
        f"{old_value:>10.3f} → {new_value:>10.3f}"
    )


def log_cascade(driver, dependent, old_max, new_max, old_value, new_value):
    """
    Logga il ricalcolo del massimo di un parametro dipendente.

    Args:
        driver: parametro che ha causato il ricalcolo
        dependent: parametro ricalcolato
        old_max / new_max: massimo prima e dopo
        old_value / new_value: valore prima e dopo il re-clamp
    """
    if not PARAMETER_LOG_CONFIG['log_cascades']:
        return

    logger = get_parameter_logger()

    if logger is None:
        return

    snapped = " (SNAP)" if new_value != old_value else ""
    logger.debug(
        f"[CASCADE] {_name(driver)} → {_name(dependent)} | "
        f"max {old_max:.3f} → {new_max:.3f} | "
        f"value {old_value:.3f} → {new_value:.3f}{snapped}"
    )


def log_clamp(raw_value, clamped_value, min_val, max_val):
    """Logga un clamp silenzioso avvenuto in una scrittura interna."""
    logger = get_parameter_logger()

    if logger is None:
        return

    logger.debug(
        f"[CLAMP]  raw={raw_value:>10.3f} → clip={clamped_value:>10.3f} | "
        f"range=[{min_val:.3f}, {max_val:.3f}]"
    )


# =============================================================================
# HELPERS
# =============================================================================

def _name(kind):
    return getattr(kind, 'value', str(kind))


def _close_handlers():
    if _parameter_logger is None:
        return
    for handler in _parameter_logger.handlers[:]:
        handler.close()
        _parameter_logger.removeHandler(handler)
