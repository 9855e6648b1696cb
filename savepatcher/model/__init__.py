"""Save file model classes."""

from savepatcher.model.section import Section, SectionKind

__all__ = ['Section', 'SectionKind']
