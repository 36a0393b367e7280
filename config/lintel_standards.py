"""Lintel Standard Values Configuration

Default tolerances, weights and thresholds for lintel unification.
All lengths are in millimetres unless otherwise specified.
"""

STANDARDS = {
    # --- TOLERANZEN ---
    "THICK_TOLERANCE_MM": 25,  # wall thickness
    "WIDTH_TOLERANCE_MM": 50,  # opening width
    "HEIGHT_TOLERANCE_MM": 300,  # opening height
    "MAX_TOTAL_DEVIATION_MM": 500,  # sum of all three axis deviations (exclusive)
    
    # --- GEWICHTE ---
    "THICK_WEIGHT": 0.6,
    "WIDTH_WEIGHT": 0.3,
    "HEIGHT_WEIGHT": 0.1,
    "GROUP_SIZE_WEIGHT": 0.4,  # 0..1
    
    # --- GRUPPEN ---
    "MIN_VIABLE_GROUP_SIZE": 5,  # groups below this are merge candidates
    "MIN_GROUP_COUNT": 1,  # merging only runs with more groups than this
    
    # --- RUNDUNG ---
    "ROUND_BASE_MM": 1,
    
    # --- MARKIERUNG ---
    "LABEL_PREFIX": "PR-",
    
    # --- EINHEITEN ---
    "FEET_TO_MM": 304.8,
}
