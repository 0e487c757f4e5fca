"""Pipeline stages.

Each stage takes plain values and returns plain values so it can be
exercised on its own with synthetic inputs.
"""

from .aggregate import aggregate_card_set
from .materialize import MaterializeResult, composite_onto_color, materialize_cards
from .reconcile import ReconcileResult, reconcile_cache

__all__ = [
    "MaterializeResult",
    "ReconcileResult",
    "aggregate_card_set",
    "composite_onto_color",
    "materialize_cards",
    "reconcile_cache",
]
