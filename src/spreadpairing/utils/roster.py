"""Roster import from pasted text.

One competitor per line, either ``Name, Rating`` or ``Name Rating`` (the
rating is the last word). Blank lines are ignored. Every other line yields a
:class:`ParsedCompetitor` so a director can see and fix each rejected line.
"""

# Spread Pairing
# Copyright (C) 2025  Spread Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from spreadpairing.exceptions import ValidationException
from spreadpairing.models.competitor import Competitor
from spreadpairing.utils import generate_id, setup_logger
from spreadpairing.utils.validation import validate_rating

logger = setup_logger(__name__)

MISSING_RATING = "Missing rating"
MISSING_NAME = "Missing name"
DUPLICATE_NAME = "Duplicate name"
INVALID_RATING = "Invalid rating (0-3000)"


@dataclass(frozen=True)
class ParsedCompetitor:
    """One parsed roster line."""

    name: str
    rating: int = 0
    is_valid: bool = True
    error: Optional[str] = None
    line_number: int = 0


def _split_line(line: str):
    if "," in line:
        parts = line.split(",")
        return parts[0].strip(), parts[-1].strip()
    name, sep, rating = line.rpartition(" ")
    if not sep:
        return "", ""
    return name.strip(), rating.strip()


def parse_roster(text: str) -> List[ParsedCompetitor]:
    """Parse pasted roster text.

    Names are compared case-insensitively; the second occurrence of a name is
    rejected as a duplicate.

    Args:
        text: Raw text, one competitor per line

    Returns:
        A ParsedCompetitor for every non-blank line, valid or not
    """
    parsed: List[ParsedCompetitor] = []
    seen: Set[str] = set()

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        name, rating_text = _split_line(line)
        if not name and not rating_text:
            parsed.append(ParsedCompetitor(line, 0, False, MISSING_RATING, line_number))
            continue
        if not name:
            parsed.append(ParsedCompetitor("", 0, False, MISSING_NAME, line_number))
            continue
        if name.lower() in seen:
            parsed.append(ParsedCompetitor(name, 0, False, DUPLICATE_NAME, line_number))
            continue

        rating = validate_rating(rating_text)
        if not rating:
            parsed.append(ParsedCompetitor(name, 0, False, INVALID_RATING, line_number))
            continue

        seen.add(name.lower())
        parsed.append(ParsedCompetitor(name, rating.value, True, None, line_number))

    rejected = sum(1 for entry in parsed if not entry.is_valid)
    if rejected:
        logger.warning("Roster import rejected %s of %s lines", rejected, len(parsed))
    return parsed


def build_roster(
    entries: Iterable[ParsedCompetitor],
    tournament_id: Optional[str] = None,
    strict: bool = False,
) -> List[Competitor]:
    """Turn parsed entries into competitors with generated ids.

    Args:
        entries: Output of :func:`parse_roster`
        tournament_id: Tournament to register the competitors in
        strict: Raise instead of skipping invalid entries

    Raises:
        ValidationException: In strict mode, on the first invalid entry
    """
    competitors = []
    for entry in entries:
        if not entry.is_valid:
            if strict:
                raise ValidationException(
                    f"Line {entry.line_number} ({entry.name or '?'}): {entry.error}"
                )
            continue
        competitors.append(
            Competitor(
                id=generate_id("competitor"),
                name=entry.name,
                rating=entry.rating,
                tournament_id=tournament_id,
            )
        )
    return competitors
