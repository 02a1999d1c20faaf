"""Daily quote domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyQuote:
    """Motivational quote cached once per calendar day."""

    quote: str
    author: str

    def to_dict(self) -> dict[str, object]:
        """Return the JSON blob stored in the cache."""
        return {"quote": self.quote, "author": self.author}
