# Section Content Store: ordered in-memory sections of one page

from .store import SectionStore

__all__ = ["SectionStore"]
