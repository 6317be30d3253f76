"""Type hints used in Court Pairing."""

from typing import Dict, List

# Player ids are opaque strings everywhere inside the engine
PlayerId = str
# player id -> other player id -> times seen together
PairCounts = Dict[PlayerId, Dict[PlayerId, int]]
# player id -> court index -> matches played on that court
CourtCounts = Dict[PlayerId, Dict[int, int]]
# Ordered list of player ids
PlayerIds = List[PlayerId]
