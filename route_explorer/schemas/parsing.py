"""
Ingestion-boundary parsing of untyped API payloads.

Each payload entry is validated into its record model. Entries that fail
validation are quarantined (logged and kept aside) so that malformed data
never reaches the merge and filter stages.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Type

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

__all__ = ["ParsedBatch", "parse_records"]


@dataclass(frozen=True)
class ParsedBatch:
    """
    Result of parsing a list of payload entries.

    Attributes:
        records: Successfully parsed records, in payload order.
        quarantined: Raw payload entries that failed validation.
    """

    records: tuple
    quarantined: tuple = ()


def parse_records(model: Type[BaseModel], payloads: Iterable[Any]) -> ParsedBatch:
    """
    Parse payload entries into ``model`` instances.

    Args:
        model: Pydantic model class to validate each entry against.
        payloads: Iterable of raw entries (normally dicts decoded from JSON).

    Returns:
        ParsedBatch with valid records and quarantined raw entries.
    """
    records = []
    quarantined = []

    for entry in payloads or ():
        try:
            records.append(model.model_validate(entry))
        except ValidationError as e:
            logger.warning(
                "Quarantined malformed %s entry: %s",
                model.__name__,
                e.errors(include_url=False)[:3],
            )
            quarantined.append(entry)

    return ParsedBatch(records=tuple(records), quarantined=tuple(quarantined))
