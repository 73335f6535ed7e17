from typing import Any, Dict, Union

from pydantic import BaseModel

from app.schemas.summary import SummarizationOptions, SummarizationOptionsRequest

# Valores por defecto documentados
DEFAULT_OPTIONS = SummarizationOptions()

OptionsInput = Union[None, SummarizationOptions, SummarizationOptionsRequest, Dict[str, Any]]


def resolve_options(user_options: OptionsInput = None) -> SummarizationOptions:
    """
    Combina las preferencias del usuario con los valores por defecto.

    Nunca falla para entradas ya validadas y no modifica el objeto recibido.
    Es idempotente: resolver unas opciones ya resueltas devuelve las mismas.
    """
    if user_options is None:
        return DEFAULT_OPTIONS
    if isinstance(user_options, BaseModel):
        provided = user_options.model_dump()
    else:
        provided = dict(user_options)

    resolved = {}
    for field, default in DEFAULT_OPTIONS.model_dump().items():
        value = provided.get(field)
        resolved[field] = default if value is None else value
    return SummarizationOptions(**resolved)
