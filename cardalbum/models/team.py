from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Team:
    """
    A team that cards can be drawn for.

    Attributes:
        name: Unique team name, also the album key
        league: League tag (e.g., "MLB", "NBA", "NHL")
        icon: Display glyph
        primary_color: Display colour
        scheme: Display scheme tag
    """

    name: str
    league: str
    icon: str = ""
    primary_color: str = ""
    scheme: str = ""
