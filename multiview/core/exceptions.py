"""
Erros de domínio do ciclo de vida das gravações.
"""


class RecordingError(ValueError):
    """Erro base das operações de gravação."""

    def __init__(self, message: str, recording_id: str = None):
        super().__init__(message)
        self.recording_id = recording_id


class RecordingNotFoundError(RecordingError):
    """Gravação ou stream inexistente no momento do start."""


class RecordingAlreadyActiveError(RecordingError):
    """Já existe um processo supervisionado para esta gravação."""


class RecordingNotActiveError(RecordingError):
    """Stop pedido para uma gravação sem processo supervisionado."""
