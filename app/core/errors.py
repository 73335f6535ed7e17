"""Errores de dominio del servicio de resúmenes.

Todos heredan de ``ValueError`` para que los endpoints los traduzcan a un 4xx
igual que cualquier otro error de validación.
"""


class SummarizerError(ValueError):
    """Error base del dominio; el mensaje es legible para el cliente."""


class InvalidInput(SummarizerError):
    pass


class UnsupportedFormat(InvalidInput):
    pass


class MissingCredential(SummarizerError):
    pass


class EmptyContent(SummarizerError):
    pass


class AudioDownloadFailed(SummarizerError):
    pass


class TranscriptionFailed(SummarizerError):
    pass


class SummarizationFailed(SummarizerError):
    pass
