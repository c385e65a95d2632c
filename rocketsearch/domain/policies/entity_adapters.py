"""Entity adapters — bind the generic search pipeline to cities and starports."""

from __future__ import annotations

from dataclasses import dataclass

from rocketsearch.domain.entities.searchable import SearchableEntity


@dataclass(frozen=True)
class EntityAdapter:
    """Configuration only: which table, which text fields, how to display a row."""

    table: str
    text_fields: tuple[str, ...]
    display_template: str

    def display_name(self, entity: SearchableEntity) -> str:
        return self.display_template.format(name=entity.name, country=entity.country or "")


CITY_ADAPTER = EntityAdapter(
    table="cities",
    text_fields=("name", "country"),
    display_template="{name}, {country}",
)

STARPORT_ADAPTER = EntityAdapter(
    table="starports",
    text_fields=("name",),
    display_template="{name}",
)
