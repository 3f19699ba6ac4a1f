"""Database models for Line-O-Matic."""

from lineomatic.models.chain import SectionChain
from lineomatic.models.line import Line
from lineomatic.models.section import Section
from lineomatic.models.station import Station

__all__ = ["Line", "Section", "SectionChain", "Station"]
