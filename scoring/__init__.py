from .aggregator import (
    fairway_hit_count,
    fill_round_holes,
    finalize_round,
    gir_count,
    hole_total_putts,
    hole_total_strokes,
    incomplete_holes,
    round_total_par,
    round_total_score,
)
from .course_data import hinokuma_country_club, lookup
from .draft import (
    add_putt,
    add_stroke,
    initialize_round,
    migrate_legacy_hole,
    remove_putt,
    remove_stroke,
)

__all__ = [
    "add_putt",
    "add_stroke",
    "fairway_hit_count",
    "fill_round_holes",
    "finalize_round",
    "gir_count",
    "hinokuma_country_club",
    "hole_total_putts",
    "hole_total_strokes",
    "incomplete_holes",
    "initialize_round",
    "lookup",
    "migrate_legacy_hole",
    "remove_putt",
    "remove_stroke",
    "round_total_par",
    "round_total_score",
]
