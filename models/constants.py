"""
League structure and balance constants for the football career simulation.
Same position list at every club; ratings and attributes are on a 0-99 scale.
"""
from typing import Dict, List, Tuple

# Positions (closed set)
POSITIONS = [
    "GK",
    "CB", "LB", "RB",
    "CDM", "CM", "CAM", "LM", "RM",
    "LW", "RW", "ST", "CF",
]

POSITIONS_DEFENCE = ["CB", "LB", "RB"]
POSITIONS_MIDFIELD = ["CDM", "CM", "CAM", "LM", "RM"]
POSITIONS_ATTACK = ["LW", "RW", "ST", "CF"]

# Players whose shooting drives expected goals
XG_FORWARD_POSITIONS = ("ST", "CF", "LW", "RW")
XG_MIDFIELD_POSITIONS = ("CM", "CAM", "CDM", "LM", "RM")

CORE_ATTRIBUTES = ["pace", "shooting", "passing", "dribbling", "defense", "physical"]

ATTRIBUTE_MIN = 0
ATTRIBUTE_MAX = 99

# Team strength weight per position (attackers count most, keepers least)
POSITION_STRENGTH_WEIGHTS: Dict[str, float] = {
    "ST": 1.4, "CF": 1.4,
    "LW": 1.3, "RW": 1.3, "CAM": 1.3,
    "CB": 1.2,
    "CM": 1.1, "CDM": 1.1, "LM": 1.1, "RM": 1.1,
    "LB": 1.0, "RB": 1.0,
    "GK": 0.8,
}

# Strength returned for an empty squad
NEUTRAL_TEAM_STRENGTH = 50.0

# Overall rating = weighted sum of the six attributes at a position
POSITION_STAT_WEIGHTS: Dict[str, Dict[str, float]] = {
    "GK": {"pace": 0.10, "shooting": 0.00, "passing": 0.15, "dribbling": 0.00, "defense": 0.30, "physical": 0.45},
    "CB": {"pace": 0.10, "shooting": 0.05, "passing": 0.20, "dribbling": 0.05, "defense": 0.45, "physical": 0.15},
    "LB": {"pace": 0.20, "shooting": 0.05, "passing": 0.20, "dribbling": 0.15, "defense": 0.25, "physical": 0.15},
    "RB": {"pace": 0.20, "shooting": 0.05, "passing": 0.20, "dribbling": 0.15, "defense": 0.25, "physical": 0.15},
    "CDM": {"pace": 0.15, "shooting": 0.05, "passing": 0.25, "dribbling": 0.10, "defense": 0.30, "physical": 0.15},
    "CM": {"pace": 0.15, "shooting": 0.10, "passing": 0.30, "dribbling": 0.15, "defense": 0.15, "physical": 0.15},
    "CAM": {"pace": 0.15, "shooting": 0.15, "passing": 0.35, "dribbling": 0.25, "defense": 0.05, "physical": 0.05},
    "LM": {"pace": 0.20, "shooting": 0.10, "passing": 0.25, "dribbling": 0.25, "defense": 0.10, "physical": 0.10},
    "RM": {"pace": 0.20, "shooting": 0.10, "passing": 0.25, "dribbling": 0.25, "defense": 0.10, "physical": 0.10},
    "LW": {"pace": 0.25, "shooting": 0.15, "passing": 0.15, "dribbling": 0.30, "defense": 0.05, "physical": 0.10},
    "RW": {"pace": 0.25, "shooting": 0.15, "passing": 0.15, "dribbling": 0.30, "defense": 0.05, "physical": 0.10},
    "ST": {"pace": 0.15, "shooting": 0.35, "passing": 0.15, "dribbling": 0.20, "defense": 0.05, "physical": 0.10},
    "CF": {"pace": 0.20, "shooting": 0.30, "passing": 0.20, "dribbling": 0.15, "defense": 0.05, "physical": 0.10},
}

# --- Match engine ---
HOME_ADVANTAGE = 1.1
NEUTRAL_VENUE = 1.0
POSSESSION_MIN = 20.0
POSSESSION_MAX = 80.0
STYLE_POSSESSION_SKEW = 10.0
FORWARD_XG_FACTOR = 0.3
MIDFIELD_XG_FACTOR = 0.1
STYLE_XG_MULTIPLIERS: Dict[str, float] = {
    "attacking": 1.3,
    "balanced": 1.0,
    "defensive": 0.6,
}
BONUS_GOAL_PROBABILITY = 0.5
GOAL_MINUTE_RANGE: Tuple[int, int] = (15, 90)
EVENT_MINUTE_RANGE: Tuple[int, int] = (1, 90)
YELLOW_CARD_RANGE: Tuple[int, int] = (2, 5)
RED_CARD_PROBABILITY = 0.15
INJURY_EVENT_PROBABILITY = 0.20
MOTM_RATING_RANGE: Tuple[float, float] = (7.5, 10.0)

# Form impact carried by each event type
EVENT_IMPACTS: Dict[str, int] = {
    "goal": 5,
    "assist": 3,
    "yellow_card": -1,
    "red_card": -3,
    "injury": -2,
    "substitution": 0,
}

# --- Player development ---
FORM_IMPACT_SCALE = 5
MORALE_WIN = 10
MORALE_DRAW = -5
MORALE_LOSS = -15
MATCH_INJURY_PROBABILITY = 0.02
INJURY_WEEKS_RANGE: Tuple[int, int] = (1, 4)
WEEKLY_FORM_DECAY = 2
YOUNG_PLAYER_AGE = 25           # strictly below: steep growth
PRIME_PLAYER_AGE = 30           # strictly below: slow growth
DECLINE_AGE = 32                # strictly above: decline
YOUNG_GROWTH_RANGE: Tuple[int, int] = (1, 3)
PRIME_GROWTH_RANGE: Tuple[int, int] = (0, 1)
DECLINE_RANGE: Tuple[int, int] = (0, 2)
RATING_FLOOR = 40.0
CONTRACT_DEPARTURE_PROBABILITY = 0.5
CONTRACT_EXTENSION_YEARS = 3
RECENT_RESULTS_LIMIT = 5

# --- Season ---
DEFAULT_LEAGUE_SIZE = 20
MATCHDAYS_PER_MONTH = 4
POINTS_WIN = 3
POINTS_DRAW = 1

# --- Finances ---
WAGE_PER_RATING_POINT = 2000
WEEKS_PER_YEAR = 52
YOUNG_WAGE_MULTIPLIER = 1.3
VETERAN_WAGE_MULTIPLIER = 0.7
STAFF_BASE_SALARIES: Dict[str, int] = {
    "coach": 50_000,
    "medical": 40_000,
    "scout": 30_000,
}
FACILITY_COST_PER_1000_SEATS = 50_000
FACILITY_COST_TRAINING = 100_000
FACILITY_COST_MEDICAL = 75_000
FACILITY_COST_ACADEMY = 80_000
# (months of runway strictly above, status), checked in order
FINANCIAL_STATUS_THRESHOLDS = [
    (24, "excellent"),
    (12, "good"),
    (6, "stable"),
    (2, "struggling"),
]
DEFAULT_TICKET_PRICE = 50
HOME_MATCHES_PER_MONTH = 2
MERCHANDISE_PER_FAN = 10
# Prize money by final league position (index 0 = champions)
PRIZE_MONEY = [
    15_000_000, 12_000_000, 10_000_000, 8_000_000, 6_000_000,
    5_000_000, 4_000_000, 3_000_000, 2_500_000, 2_000_000,
    1_500_000, 1_000_000, 800_000, 600_000, 400_000,
    300_000, 200_000, 100_000, 50_000, 25_000,
]
BUDGET_ALLOCATION_SHARES: Dict[str, float] = {
    "player_wages": 0.50,
    "staff_salaries": 0.10,
    "facility_maintenance": 0.08,
    "scouting_budget": 0.07,
    "reserve": 0.25,
}

# --- Board ---
DIFFICULTIES = ["easy", "medium", "hard"]
# difficulty -> (position target, points target, reward multiplier)
DIFFICULTY_SETTINGS: Dict[str, Tuple[int, int, float]] = {
    "easy": (10, 45, 1.0),
    "medium": (6, 60, 1.5),
    "hard": (3, 75, 2.0),
}
OBJECTIVE_TYPES = [
    "league_position",
    "points_target",
    "cup_win",
    "player_development",
    "financial",
]
YOUTH_DEVELOPMENT_AGE = 23
YOUTH_DEVELOPMENT_RATING = 80

# --- Squad ---
SQUAD_POSITION_COUNTS: Dict[str, int] = {
    "GK": 2, "CB": 4, "LB": 2, "RB": 2,
    "CDM": 2, "CM": 3, "CAM": 2, "LM": 1, "RM": 1,
    "LW": 2, "RW": 2, "ST": 2, "CF": 1,
}
LINEUP_SIZE = 11
YOUTH_INTAKE_SIZE = 5
YOUTH_PROMOTION_AGE = 21
YOUTH_PROMOTION_POTENTIAL = 75
YOUTH_RELEASE_AGE = 23

# --- Staff ---
STAFF_ROLE_SALARIES: Dict[str, int] = {
    "assistant_coach": 150_000,
    "attacking_coach": 120_000,
    "defensive_coach": 120_000,
    "fitness_coach": 100_000,
    "goalkeeper_coach": 100_000,
    "head_physio": 120_000,
    "sports_psychologist": 100_000,
    "scout": 50_000,
}
STAFF_ROLES = list(STAFF_ROLE_SALARIES)
STAFF_NATIONALITY_MULTIPLIERS: Dict[str, float] = {
    "domestic": 0.8,
    "european": 1.0,
    "south_american": 0.9,
    "african": 0.7,
    "asian": 0.8,
}
STAFF_NATIONALITIES = list(STAFF_NATIONALITY_MULTIPLIERS)
STAFF_SALARY_PER_EXPERIENCE_YEAR = 5_000
STAFF_SALARY_PER_EFFECTIVENESS_POINT = 1_000
STAFF_RENEWAL_YEARS = 2
STAFF_RENEWAL_RAISE = 0.1
# Rating an empty post counts as
NEUTRAL_STAFF_EFFECTIVENESS = 50
# (role, priority, what the hire improves)
STAFF_RECOMMENDATIONS: List[Tuple[str, str, str]] = [
    ("attacking_coach", "high", "Improve attacking player development"),
    ("defensive_coach", "high", "Improve defensive player development"),
    ("fitness_coach", "medium", "Improve player fitness and reduce injuries"),
    ("goalkeeper_coach", "medium", "Improve goalkeeper development"),
    ("head_physio", "critical", "Reduce injury recovery time"),
    ("sports_psychologist", "medium", "Improve player morale and mental resilience"),
]
STAFF_PRIORITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}
STARTING_STAFF_ROLES = [
    "assistant_coach", "attacking_coach", "defensive_coach", "fitness_coach", "head_physio", "scout",
]
# Overall rating points per point of summed coaching bonus, applied to seasonal growth
COACHING_GROWTH_PER_BONUS_POINT = 0.1

COUNTRIES = ["England", "Spain", "Germany", "Italy", "France", "Portugal", "Netherlands"]

CLUB_PREFIXES = [
    "Athletic", "Real", "Sporting", "Racing", "Dynamo", "Olympic", "United",
    "City", "Rovers", "Wanderers",
]
CITIES = [
    "Ashford", "Bramley", "Castlebrook", "Dunmore", "Eastwick", "Fairhaven",
    "Glenport", "Harrowgate", "Ironbridge", "Kingsmere", "Lakeside", "Millbrook",
    "Northam", "Oakridge", "Portland", "Queensbury", "Redcliffe", "Stonehill",
    "Thornbury", "Westfield", "Whitby", "Yarmouth",
]

FIRST_NAMES = [
    "James", "Lucas", "Mateo", "Luca", "Noah", "Leon", "Hugo", "Diego",
    "Marco", "Tom", "Ben", "Jonas", "Pablo", "Rafael", "Kai", "Ethan",
    "Adam", "Felix", "Joao", "Andre", "Sami", "Theo", "Oscar", "Nico",
]
LAST_NAMES = [
    "Silva", "Muller", "Rossi", "Garcia", "Smith", "Dubois", "Jansen",
    "Fernandes", "Costa", "Schmidt", "Martin", "Lopez", "Bianchi", "Walker",
    "Novak", "Moreau", "Santos", "Becker", "Russo", "Kane", "Hughes", "Varga",
]
