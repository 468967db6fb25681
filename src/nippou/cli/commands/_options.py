"""Option helpers shared by report commands."""

from typing import Optional

import click

from ...exceptions import InvalidInputError
from ...usecase import LocationInput, VoiceInput


def json_option(func):
    return click.option(
        "--json", "as_json", is_flag=True, help="Print JSON instead of a table"
    )(func)


def read_content(content: Optional[str], content_file) -> Optional[str]:
    """Content from ``--content`` or ``--file`` (``-`` reads stdin)."""
    if content is not None and content_file is not None:
        raise InvalidInputError("content", "use either --content or --file, not both")
    if content_file is not None:
        return content_file.read()
    return content


def build_location(
    latitude: Optional[float], longitude: Optional[float], address: Optional[str]
) -> Optional[LocationInput]:
    if latitude is None and longitude is None:
        if address:
            raise InvalidInputError("location", "--address requires --lat and --lon")
        return None
    if latitude is None or longitude is None:
        raise InvalidInputError("location", "--lat and --lon must be given together")
    return LocationInput(latitude=latitude, longitude=longitude, address=address or "")


def build_voice(voice_model: Optional[str], voice_off: bool = False) -> Optional[VoiceInput]:
    if voice_model is not None and voice_off:
        raise InvalidInputError("voice", "--voice-model and --voice-off are mutually exclusive")
    if voice_off:
        return VoiceInput(enabled=False)
    if voice_model is not None:
        return VoiceInput(enabled=True, model_name=voice_model)
    return None
