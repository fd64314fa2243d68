from clubpairing.pairing.greedy_swiss import (
    PairingCandidate,
    generate_round,
    sort_candidates,
)

__all__ = [
    "PairingCandidate",
    "generate_round",
    "sort_candidates",
]
