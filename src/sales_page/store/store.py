"""In-memory ordered collection of one page's sections.

Usage:
    store = SectionStore(page.sections)
    hero = store.add(SectionVariant.HERO)
    store.update(hero.key, {"title": "Anatomia Muscular"})
    store.move(hero.key, 0)
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from src.sales_page.sections import (
    Persisted,
    Section,
    SectionVariant,
    default_content,
    sort_sections,
)

logger = logging.getLogger(__name__)


class SectionStore:
    """Holds sections in insertion sequence; display order comes from `order`.

    Persisted sections removed here are remembered in `removed_ids` so a save
    can delete exactly those rows.
    """

    def __init__(self, sections: Iterable[Section] = ()):
        self._sections: list[Section] = list(sections)
        self._removed_ids: list[str] = []

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    @property
    def sections(self) -> list[Section]:
        return list(self._sections)

    @property
    def removed_ids(self) -> list[str]:
        return list(self._removed_ids)

    def sorted(self) -> list[Section]:
        """Sections in display order."""
        return sort_sections(self._sections)

    def _index_of(self, key: str) -> int:
        for i, section in enumerate(self._sections):
            if section.key == key:
                return i
        raise KeyError(f"No section with key {key!r}")

    def get(self, key: str) -> Section:
        return self._sections[self._index_of(key)]

    def find(self, key: str) -> Optional[Section]:
        try:
            return self.get(key)
        except KeyError:
            return None

    def add(self, variant: SectionVariant, content: Optional[dict] = None) -> Section:
        """Append a new unsaved section, starting from the variant defaults."""
        section = Section(
            variant=variant,
            content=default_content(variant) if content is None else content,
            order=len(self._sections),
        )
        self._sections.append(section)
        logger.debug("Added %s section %s", section.variant, section.key)
        return section

    def insert(self, section: Section, index: Optional[int] = None) -> Section:
        """Place an existing section object into the collection."""
        if index is None:
            self._sections.append(section)
        else:
            self._sections.insert(index, section)
        return section

    def update(self, key: str, content: dict) -> Section:
        """Replace a section's content wholesale."""
        i = self._index_of(key)
        updated = self._sections[i].with_content(content)
        self._sections[i] = updated
        return updated

    def remove(self, key: str) -> Section:
        i = self._index_of(key)
        section = self._sections.pop(i)
        if isinstance(section.id, Persisted):
            self._removed_ids.append(section.id.id)
        logger.debug("Removed section %s", key)
        return section

    def move(self, key: str, new_index: int) -> list[Section]:
        """Move a section to a display position and renumber `order` 0..n-1."""
        keys = [s.key for s in self.sorted()]
        if key not in keys:
            raise KeyError(f"No section with key {key!r}")
        keys.remove(key)
        keys.insert(max(0, min(new_index, len(keys))), key)
        return self.reorder(keys)

    def reorder(self, keys: list[str]) -> list[Section]:
        """Assign `order` from the position of each key in `keys`."""
        if sorted(keys) != sorted(s.key for s in self._sections):
            raise ValueError("reorder() needs every section key exactly once")
        position = {key: i for i, key in enumerate(keys)}
        self._sections = [
            s.model_copy(update={"order": position[s.key]}) for s in self._sections
        ]
        return self.sorted()

    def mark_persisted(self, key: str, section_id: str) -> Section:
        """Swap an unsaved section's identity for the id the backend assigned."""
        i = self._index_of(key)
        persisted = self._sections[i].model_copy(update={"id": Persisted(id=section_id)})
        self._sections[i] = persisted
        return persisted

    def clear_removed(self) -> None:
        self._removed_ids.clear()
