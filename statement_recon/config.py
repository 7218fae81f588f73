"""
Format-inference settings for bank statement ingestion.

Different banks export statements with different delimiters, header
languages and date styles. Everything the ingestor infers is driven by
an IngestConfig, so a new export format is handled by passing a tweaked
config rather than by editing the parser.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

# Ordered (field, synonyms) table. For each field the first header cell,
# left to right, containing any synonym wins.
COLUMN_SYNONYMS = (
    ('date', ('date', 'datum')),
    ('description', ('description', 'memo', 'detail', 'beschreibung')),
    ('amount', ('amount', 'betrag')),
    ('type', ('type', 'transaction', 'art')),
)

REQUIRED_FIELDS = ('date', 'description', 'amount')

# Checked in priority order against the header line; comma is the fallback.
DELIMITER_CANDIDATES = (';', '\t')
DEFAULT_DELIMITER = ','

CREDIT_KEYWORDS = ('credit', 'deposit', 'haben')

# Day-first fallbacks tried after the general date parser gives up.
DATE_PATTERNS = (
    r'^(?P<day>\d{1,2})\.(?P<month>\d{1,2})\.(?P<year>\d{4})$',  # D.M.YYYY
    r'^(?P<day>\d{1,2})-(?P<month>\d{1,2})-(?P<year>\d{4})$',    # D-M-YYYY
)


class IngestConfig(BaseModel):
    """Inspectable knobs for delimiter, column, date and direction inference.

    Attributes:
        delimiter: Forces a delimiter instead of sniffing the header line.
        delimiter_candidates: Delimiters looked for in the header, in order.
        default_delimiter: Used when no candidate appears in the header.
        column_synonyms: Ordered (field, synonyms) header rules.
        credit_keywords: Type-column values containing any of these are credits.
        date_patterns: Regexes with day/month/year groups tried after the
            general parser.
        use_general_parser: Try the general-purpose date parser first.
    """

    model_config = ConfigDict(frozen=True)

    delimiter: Optional[str] = None
    delimiter_candidates: Tuple[str, ...] = DELIMITER_CANDIDATES
    default_delimiter: str = DEFAULT_DELIMITER
    column_synonyms: Tuple[Tuple[str, Tuple[str, ...]], ...] = COLUMN_SYNONYMS
    credit_keywords: Tuple[str, ...] = CREDIT_KEYWORDS
    date_patterns: Tuple[str, ...] = DATE_PATTERNS
    use_general_parser: bool = True

    def with_delimiter(self, delimiter):
        """Return a copy of this config that always splits on ``delimiter``."""
        return self.model_copy(update={'delimiter': delimiter})

    def synonyms_for(self, field) -> Tuple[str, ...]:
        for name, synonyms in self.column_synonyms:
            if name == field:
                return synonyms
        return ()


DEFAULT_CONFIG = IngestConfig()
