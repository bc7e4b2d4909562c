# Game rules. Changing these changes the game, not the engine.

LOCK_MINUTES_BEFORE = 5

SCORING_RULES = {
    "pole": 10,
    "fastest_lap": 8,
    "driver_of_the_day": 6,
    "race_podium": {
        "p1": 15,
        "p2": 10,
        "p3": 7,
        "in_podium": 5,
    },
    "sprint_pole": 5,
    "sprint_podium": {
        "p1": 8,
        "p2": 5,
        "p3": 3,
        "in_podium": 2,
    },
}

PODIUM_SLOTS = ("p1", "p2", "p3")

# Achievement catalogue: id -> (name, description)
ACHIEVEMENTS = {
    "driver_of_the_weekend": ("Driver of the Weekend", "Top score of a Grand Prix."),
    "hat_trick": ("Hat-Trick", "Pole, P1 and fastest lap right in the same race."),
    "perfect_podium": ("Perfect Podium", "All three podium positions in exact order."),
    "nostradamus": ("Nostradamus", "Five or more exact hits in a single Grand Prix."),
    "veteran": ("Veteran", "Took part in 10 or more Grands Prix."),
    "league_creator": ("League Creator", "Created a tournament."),
}

NOSTRADAMUS_MIN_HITS = 5
VETERAN_MIN_GPS = 10
