"""
parameter_kind.py

Enumerazione CHIUSA dei parametri di progetto della caraffa.

Ogni membro identifica una grandezza fisica. Il valore del membro è il nome
usato nei file YAML di progetto (snake_case), così il registry dei bounds,
il loader e i report condividono la stessa identità. (DRY)
"""

from enum import Enum
from typing import Union


class ParameterKind(Enum):
    """Grandezze fisiche della caraffa (lunghezze in mm, angoli in gradi)."""
    CARAFE_HEIGHT = "carafe_height"        # Altezza del corpo
    BASE_DIAMETER = "base_diameter"        # Diametro della base
    THROAT_DIAMETER = "throat_diameter"    # Diametro del collo (apertura)
    STOPPER_HEIGHT = "stopper_height"      # Altezza del tappo
    HANDLE_LENGTH = "handle_length"        # Lunghezza del manico
    HANDLE_ANGLE = "handle_angle"          # Angolo del manico

    @property
    def label(self) -> str:
        """Nome leggibile: 'carafe_height' -> 'Carafe height'."""
        return self.value.replace('_', ' ').capitalize()

    @classmethod
    def from_name(cls, name: Union[str, 'ParameterKind']) -> 'ParameterKind':
        """
        Risolve un kind a partire dal membro stesso, dal valore YAML
        ('carafe_height') o dal nome del membro ('CARAFE_HEIGHT').

        Raises:
            UnknownKindError: se il nome non corrisponde a nessun membro.
        """
        if isinstance(name, cls):
            return name

        # Import locale: exceptions importa ParameterKind per i messaggi
        from parameters.exceptions import UnknownKindError

        if not isinstance(name, str):
            raise UnknownKindError(name)

        key = name.strip()
        for kind in cls:
            if key == kind.value or key.upper() == kind.name:
                return kind
        raise UnknownKindError(name)
