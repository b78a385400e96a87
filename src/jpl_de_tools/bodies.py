"""Solar-system bodies addressable in a DE dataset."""

from __future__ import annotations

from enum import Enum


class Body(Enum):
    """Closed set of bodies with their DE element number, name, and abbreviation.

    Element numbers index the header layout table, except Earth (301), which
    has no slot of its own and is derived from the Earth-Moon barycenter and
    the geocentric Moon, and the Solar System barycenter (0), which is the
    origin.
    """

    SOLAR_SYSTEM_BARYCENTER = (0, 'Solar System barycenter', 'SSB')
    MERCURY = (1, 'Mercury', 'Me')
    VENUS = (2, 'Venus', 'V')
    EARTH_MOON_BARYCENTER = (3, 'Earth-Moon barycenter', 'EMB')
    EARTH = (301, 'Earth', 'E')
    MARS = (4, 'Mars', 'M')
    JUPITER = (5, 'Jupiter', 'J')
    SATURN = (6, 'Saturn', 'S')
    URANUS = (7, 'Uranus', 'U')
    NEPTUNE = (8, 'Neptune', 'N')
    PLUTO = (9, 'Pluto', 'P')
    MOON = (10, 'Moon', 'Lu')
    SUN = (11, 'Sun', 'Su')

    def __init__(self, element: int, label: str, abbreviation: str) -> None:
        self.element = element
        self.label = label
        self.abbreviation = abbreviation

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_element(cls, element: int) -> Body:
        """Return the body with the given element number (0, 1..11, or 301).

        Raises:
            ValueError: No body has that number.
        """
        for body in cls:
            if body.element == element:
                return body
        raise ValueError(f'No body for element {element}')

    @classmethod
    def from_name(cls, name: str) -> Body:
        """Return the body for a case-insensitive name, abbreviation, or member name.

        Parameters:
            name: e.g. 'Mars', 'emb', 'Earth-Moon barycenter', 'SOLAR_SYSTEM_BARYCENTER'.

        Raises:
            ValueError: Name is not recognized.
        """
        key = name.strip().lower()
        for body in cls:
            if key in (body.label.lower(), body.abbreviation.lower(), body.name.lower()):
                return body
        raise ValueError(f'Unknown body {name!r}')
