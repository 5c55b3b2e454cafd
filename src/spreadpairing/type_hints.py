"""Type hints used in Spread Pairing."""

from typing import FrozenSet, List, Tuple

# Order-independent identity of two competitors
PairKey = FrozenSet[str]
# Caller-supplied pair of competitor ids, player 1 first
ManualPair = Tuple[str, str]
# Human readable impact tags of one simulated standing
ImpactTags = List[str]
