"""Enumerations and physiological constants for the training engine.

Thresholds and constants cite their published source where one exists.
Policy values without a citation are coaching conventions and are named
here so they can be tuned in one place.
"""

from enum import IntEnum, auto


class IntensityUnit(IntEnum):
    """Unit of the intensity axis of a lactate step test."""

    SPEED = auto()  # km/h
    POWER = auto()  # W
    PACE = auto()   # min/km


class ThresholdMethod(IntEnum):
    """How a threshold value was obtained."""

    DMAX = auto()
    MOD_DMAX = auto()
    FALLBACK = auto()


class Confidence(IntEnum):
    """Confidence grade attached to a threshold or a derived pace."""

    HIGH = auto()
    MEDIUM = auto()
    LOW = auto()


class ZoneSource(IntEnum):
    """Where a zone table came from."""

    TEST = auto()     # computed from a lactate test
    STORED = auto()   # previously computed zones stored on the test record
    ELITE = auto()    # external reference paces


class TrainingPhase(IntEnum):
    """Macrocycle training phases in chronological order."""

    BASE = auto()
    BUILD = auto()
    PEAK = auto()
    TAPER = auto()


class CanovaPhase(IntEnum):
    """Canova's five-period model, mapped onto the four macrocycle phases."""

    GENERAL = auto()
    FUNDAMENTAL = auto()
    SPECIAL = auto()
    SPECIFIC = auto()
    TAPER = auto()


class MethodologyType(IntEnum):
    """Implemented training methodologies."""

    POLARIZED = auto()
    PYRAMIDAL = auto()
    NORWEGIAN = auto()          # double-threshold days
    NORWEGIAN_SINGLE = auto()   # single-threshold
    CANOVA = auto()             # threshold-concentrated, marathon-specific


class AthleteLevel(IntEnum):
    """Athlete classification used by the methodology selector."""

    BEGINNER = auto()
    RECREATIONAL = auto()
    ADVANCED = auto()
    ELITE = auto()


class ExperienceLevel(IntEnum):
    """Self-reported experience level on the generation request."""

    BEGINNER = auto()
    INTERMEDIATE = auto()
    ADVANCED = auto()


class GoalType(IntEnum):
    """Program goal."""

    MARATHON = auto()
    HALF_MARATHON = auto()
    TEN_K = auto()
    FIVE_K = auto()
    FITNESS = auto()
    CYCLING = auto()
    SKIING = auto()
    CUSTOM = auto()


class WorkoutCategory(IntEnum):
    """Session categories produced by the distribution engine."""

    LONG = auto()
    TEMPO = auto()
    INTERVALS = auto()
    HILL_SPRINTS = auto()
    CANOVA_INTERVALS = auto()
    EASY = auto()
    RECOVERY = auto()
    STRENGTH = auto()
    CORE = auto()
    PLYOMETRIC = auto()


class WorkoutType(IntEnum):
    """Modality of a built workout."""

    RUNNING = auto()
    CYCLING = auto()
    SKIING = auto()
    STRENGTH = auto()
    CORE = auto()
    PLYOMETRIC = auto()
    RECOVERY = auto()


class WorkoutIntensity(IntEnum):
    """Overall intensity label of a built workout, easiest first."""

    RECOVERY = auto()
    EASY = auto()
    MODERATE = auto()
    THRESHOLD = auto()
    INTERVAL = auto()
    MAX = auto()


class SegmentType(IntEnum):
    """Structured workout segment types."""

    WARMUP = auto()
    WORK = auto()
    INTERVAL = auto()
    REST = auto()
    COOLDOWN = auto()
    EXERCISE = auto()


class ExerciseCategory(IntEnum):
    """Exercise catalogue categories."""

    STRENGTH = auto()
    CORE = auto()
    PLYOMETRIC = auto()


class BodyRegion(IntEnum):
    """Biomechanical pillars used to pick strength exercises."""

    UPPER_BODY = auto()
    CORE = auto()
    POSTERIOR_CHAIN = auto()
    KNEE_DOMINANCE = auto()
    UNILATERAL = auto()
    FOOT_ANKLE = auto()


class StrengthFocus(IntEnum):
    """Emphasis of a strength session."""

    UPPER = auto()
    LOWER = auto()
    FULL = auto()


# ---------------------------------------------------------------------------
# Threshold detection — Cheng et al. (1992), Int J Sports Med 13(7):518-522
# ---------------------------------------------------------------------------
# Minimum number of test stages for a 3rd-order fit
DMAX_MIN_POINTS = 4

# Number of equal intervals used to sample the fitted curve
DMAX_SAMPLE_INTERVALS = 1000

# Below this R² the polynomial is not trusted and OBLA is used instead
DMAX_MIN_R2 = 0.90

# Confidence grading
CONFIDENCE_HIGH_R2 = 0.95
CONFIDENCE_LOW_RELATIVE_DISTANCE = 0.05
CONFIDENCE_HIGH_RELATIVE_DISTANCE = 0.10

# Onset of blood lactate accumulation — Heck et al. (1985), Int J Sports Med 6(3)
OBLA_LACTATE_MMOL = 4.0

# Aerobic threshold as fixed 2 mmol/L — Kindermann et al. (1979)
AEROBIC_THRESHOLD_LACTATE_MMOL = 2.0

# Physiological plausibility band for a Mod-Dmax result — Bishop et al. (1998)
MOD_DMAX_MIN_LACTATE_MMOL = 1.5
MOD_DMAX_MAX_LACTATE_MMOL = 4.5

# Near-monotonic check: a drop larger than this counts as a violation,
# more than MAX_MONOTONIC_VIOLATIONS of them triggers a warning.
MONOTONIC_DROP_TOLERANCE_MMOL = 0.2
MAX_MONOTONIC_VIOLATIONS = 1

# ---------------------------------------------------------------------------
# Training zones as fraction of anaerobic-threshold intensity
# Seiler & Kjerland (2006); Coggan & Allen (2010) for the power analogue
# ---------------------------------------------------------------------------
ZONE_FRACTION_OF_THRESHOLD = {
    1: (0.55, 0.75),
    2: (0.75, 0.87),
    3: (0.87, 0.95),
    4: (0.95, 1.03),
    5: (1.03, 1.20),
}

ZONE_NAMES = {
    1: "Recovery",
    2: "Aerobic endurance",
    3: "Tempo",
    4: "Threshold",
    5: "VO2max",
}

# The Z2/Z3 boundary follows LT1 when it is known, kept inside this band
AEROBIC_BOUNDARY_MIN_FRACTION = 0.70
AEROBIC_BOUNDARY_MAX_FRACTION = 0.92

# ---------------------------------------------------------------------------
# Pace validation
# ---------------------------------------------------------------------------
# Marathon pace ≈ 88-92% of LT2 speed — Jones (2006), Int J Sports Physiol Perform
MARATHON_PACE_FRACTION_OF_THRESHOLD = 0.90

DEFAULT_MARATHON_PACE_KMH = 12.0

# Riegel (1981), Am Sci 69(3):285-290
RIEGEL_EXPONENT = 1.06

MARATHON_DISTANCE_KM = 42.195
HALF_MARATHON_DISTANCE_KM = 21.0975

# Race- and test-derived marathon pace disagreeing by more than this is flagged
RACE_TEST_MISMATCH_TOLERANCE = 0.10

# ---------------------------------------------------------------------------
# Program bounds
# ---------------------------------------------------------------------------
MIN_PLAN_WEEKS = 4
MAX_PLAN_WEEKS = 52
MIN_TRAINING_DAYS = 2
MAX_TRAINING_DAYS = 7

# ---------------------------------------------------------------------------
# Phase allocation — Bosquet et al. (2007), Mujika & Padilla (2003)
# ---------------------------------------------------------------------------
SHORT_PLAN_WEEKS = 8     # <= this: 1-week taper
MEDIUM_PLAN_WEEKS = 20   # <= this: 2-week taper, else 3
PEAK_SHARE = 0.20
CANOVA_PEAK_SHARE = 0.25

# BASE share of the weeks left after TAPER and PEAK, by plan length
BASE_SHARE_SHORT = 0.40    # <= 12 weeks
BASE_SHARE_MEDIUM = 0.45   # <= 20 weeks
BASE_SHARE_LONG = 0.50
BASE_SHARE_ADJUSTMENT = {
    MethodologyType.POLARIZED: 0.0,
    MethodologyType.PYRAMIDAL: 0.0,
    MethodologyType.NORWEGIAN: 0.05,
    MethodologyType.NORWEGIAN_SINGLE: 0.05,
    MethodologyType.CANOVA: -0.05,
}

# Weekly volume (km) at plan start and peak, per experience level
VOLUME_TARGETS_KM = {
    ExperienceLevel.BEGINNER: (20.0, 40.0),
    ExperienceLevel.INTERMEDIATE: (35.0, 65.0),
    ExperienceLevel.ADVANCED: (50.0, 90.0),
}

# Cycling volume is prescribed in hours per week
VOLUME_TARGETS_HOURS = {
    ExperienceLevel.BEGINNER: (4.0, 7.0),
    ExperienceLevel.INTERMEDIATE: (6.0, 10.0),
    ExperienceLevel.ADVANCED: (8.0, 14.0),
}

GOAL_VOLUME_MULTIPLIER = {
    GoalType.MARATHON: 1.2,
    GoalType.HALF_MARATHON: 1.0,
    GoalType.TEN_K: 0.8,
    GoalType.FIVE_K: 0.7,
    GoalType.FITNESS: 0.6,
    GoalType.CYCLING: 1.0,
    GoalType.SKIING: 1.0,
    GoalType.CUSTOM: 1.0,
}

# Exponential taper — Bosquet et al. (2007): 41-60% volume reduction
TAPER_START_FRACTION = 0.85
TAPER_END_FRACTION = 0.55

# ---------------------------------------------------------------------------
# Deload policy
# ---------------------------------------------------------------------------
MIN_DELOAD_CADENCE_WEEKS = 3
MAX_DELOAD_CADENCE_WEEKS = 5

# Added to the methodology's deload frequency (negative = more frequent)
DELOAD_CADENCE_OFFSET = {
    AthleteLevel.BEGINNER: 1,
    AthleteLevel.RECREATIONAL: 0,
    AthleteLevel.ADVANCED: -1,
    AthleteLevel.ELITE: -1,
}

# Added to the methodology's volume reduction (percentage points)
DELOAD_DEPTH_BONUS_PCT = {
    AthleteLevel.BEGINNER: -5.0,
    AthleteLevel.RECREATIONAL: 0.0,
    AthleteLevel.ADVANCED: 5.0,
    AthleteLevel.ELITE: 5.0,
}

# A deload never takes a week below this share of peak volume
DELOAD_VOLUME_FLOOR_PCT = 40.0

# ---------------------------------------------------------------------------
# Session structure (minutes)
# ---------------------------------------------------------------------------
LONG_RUN_WARMUP_MIN = 10
LONG_RUN_COOLDOWN_MIN = 10
TEMPO_WARMUP_MIN = 15
TEMPO_COOLDOWN_MIN = 10
INTERVAL_WARMUP_MIN = 20
INTERVAL_COOLDOWN_MIN = 10
EASY_RUN_MIN_DURATION = 20
EASY_RUN_MAX_DURATION = 75
RECOVERY_SESSION_DURATION = 30

# Share of weekly volume in the long run — Pfitzinger & Douglas (2009)
LONG_RUN_SHARE = {
    ExperienceLevel.BEGINNER: 0.30,
    ExperienceLevel.INTERMEDIATE: 0.28,
    ExperienceLevel.ADVANCED: 0.25,
}

LONG_RUN_CAP_KM = {
    GoalType.MARATHON: 35.0,
    GoalType.HALF_MARATHON: 24.0,
    GoalType.TEN_K: 20.0,
    GoalType.FIVE_K: 16.0,
    GoalType.FITNESS: 18.0,
    GoalType.CYCLING: 180.0,
    GoalType.SKIING: 40.0,
    GoalType.CUSTOM: 30.0,
}

# Strength rep schemes by phase: (sets, reps, rest seconds)
# Rønnestad & Mujika (2014), Scand J Med Sci Sports 24(4):603-612
STRENGTH_SCHEME = {
    TrainingPhase.BASE: (3, "12-15", 90),
    TrainingPhase.BUILD: (4, "8-10", 120),
    TrainingPhase.PEAK: (3, "6-8", 180),
    TrainingPhase.TAPER: (2, "8-10", 90),
}
MINUTES_PER_STRENGTH_SET = 3

CORE_SCHEME = (3, "45-60s", 45)
CORE_SESSION_DURATION = 30
CORE_EXERCISE_COUNT = 4

PLYOMETRIC_SCHEME = (3, "8-10", 120)
PLYOMETRIC_SESSION_DURATION = 35
PLYOMETRIC_EXERCISE_COUNT = 3
