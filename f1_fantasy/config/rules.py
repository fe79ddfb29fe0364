FANTASY_RULES = {
    "roster": {
        # Every user gets one roster of each kind at registration
        "initial_credits": {
            "Premium": 1000,
            "Challenger": 700,
        },
    },
    "valuation": {
        # Number of preceding races (by date) averaged into a driver's baseline
        "baseline_window": 3,
        # Position assumed for every missing history slot and for round 1
        "ghost_position": 10,
        # Inclusive range of position differences covered by the lookup table
        "table_range": (-20, 20),
    },
}
