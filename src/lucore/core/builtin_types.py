"""
Catalog of prebuilt entity types and their per-locale availability.

``PER_LOCALE_AVAILABILITY[locale][type]`` is one of:

- the type name itself: available as requested
- another type name: available under a locale-specific substitute
- ``None``: not available for that locale
"""

from types import MappingProxyType

CONSOLIDATED_LIST: tuple[str, ...] = (
    "age",
    "datetimeV2",
    "dimension",
    "email",
    "geographyV2",
    "keyPhrase",
    "money",
    "number",
    "ordinal",
    "ordinalV2",
    "percentage",
    "personName",
    "phonenumber",
    "temperature",
    "url",
)

DEFAULT_LOCALE = "en-us"


def _availability(
    unavailable: tuple[str, ...] = (),
    substitutes: dict[str, str] | None = None,
) -> MappingProxyType:
    table: dict[str, str | None] = {name: name for name in CONSOLIDATED_LIST}
    for name in unavailable:
        table[name] = None
    table.update(substitutes or {})
    return MappingProxyType(table)


PER_LOCALE_AVAILABILITY: MappingProxyType = MappingProxyType(
    {
        "en-us": _availability(),
        "fr-ca": _availability(
            unavailable=("geographyV2", "keyPhrase", "ordinalV2", "personName"),
        ),
        "zh-cn": _availability(
            unavailable=("geographyV2", "keyPhrase", "ordinalV2", "personName", "phonenumber"),
        ),
        "fr-fr": _availability(unavailable=("geographyV2", "ordinalV2", "personName")),
        "es-es": _availability(unavailable=("geographyV2", "ordinalV2", "personName")),
        "es-mx": _availability(
            unavailable=("geographyV2", "keyPhrase", "ordinalV2", "personName"),
        ),
        "it-it": _availability(unavailable=("geographyV2", "ordinalV2", "personName")),
        "de-de": _availability(unavailable=("geographyV2", "ordinalV2", "personName")),
        "ja-jp": _availability(
            unavailable=("email", "geographyV2", "ordinalV2", "personName", "phonenumber", "url"),
        ),
        "pt-br": _availability(unavailable=("geographyV2", "ordinalV2", "personName")),
        "ko-kr": _availability(
            unavailable=(
                "age",
                "dimension",
                "email",
                "geographyV2",
                "money",
                "ordinalV2",
                "personName",
                "phonenumber",
                "temperature",
                "url",
            ),
            substitutes={"datetimeV2": "datetime"},
        ),
        "nl-nl": _availability(
            unavailable=("geographyV2", "ordinalV2", "personName"),
            substitutes={"datetimeV2": "datetime"},
        ),
        "tr-tr": _availability(
            unavailable=("geographyV2", "keyPhrase", "ordinalV2", "personName"),
            substitutes={"datetimeV2": "datetime"},
        ),
    }
)


def is_builtin_type(entity_type: str) -> bool:
    return entity_type in CONSOLIDATED_LIST


def availability_for(locale: str, entity_type: str) -> str | None:
    """
    Look up how ``entity_type`` is offered in ``locale``.

    Raises:
        KeyError: If the locale is not in the availability table
    """
    return PER_LOCALE_AVAILABILITY[locale.lower()][entity_type]


def supported_locales() -> list[str]:
    return sorted(PER_LOCALE_AVAILABILITY)
