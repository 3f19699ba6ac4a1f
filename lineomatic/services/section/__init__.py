"""Section management components: input validation and chain editing."""

from lineomatic.services.section.editing import SectionEditor
from lineomatic.services.section.validation import LineValidator

__all__ = ["LineValidator", "SectionEditor"]
