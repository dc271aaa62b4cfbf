from enum import Enum


class TeamCategory(str, Enum):
    SIG = "sig"  # Special interest group
    WG = "wg"  # Working group
    TEAM = "team"  # Primary team, the only category that originates edges
