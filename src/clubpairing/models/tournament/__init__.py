from clubpairing.models.tournament.pairing import Pairing
from clubpairing.models.tournament.roster_entry import RosterEntry
from clubpairing.models.tournament.round_data import RoundData
from clubpairing.models.tournament.tournament import Tournament

__all__ = [
    "Pairing",
    "RosterEntry",
    "RoundData",
    "Tournament",
]
