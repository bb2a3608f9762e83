from typing import Dict


def init_metrics() -> Dict[str, int | float | bool | dict]:
    return {
        'usable_cells': 0,
        'rooms_attempted': 0,
        'rooms_placed': 0,
        'pack_rounds': 0,
        'doors_placed': 0,
        'carve_seeds': 0,
        'hallway_cells_carved': 0,
        'dead_ends_removed': 0,
        'doors_removed': 0,
        'prune_passes': 0,
        'doors_kept': 0,
        'doors_demoted': 0,
        'walls_inferred': 0,
        'orphan_rooms_dropped': 0,
        'regions_dropped': 0,
        'rooms_detached': 0,
        'cells_reverted': 0,
        'rooms_final': 0,
        'floor_variants': {},
        'runtime_ms': 0.0,
    }


# Keys that depend only on seed and configuration (timings excluded)
DETERMINISTIC_KEYS = tuple(k for k in init_metrics() if k != 'runtime_ms')

__all__ = ["init_metrics", "DETERMINISTIC_KEYS"]
