"""ProgramGenerator — the orchestrator that turns a lactate test into a program."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from training_engine.catalogue import (
    AthleteDataSource,
    ExerciseCatalogue,
    get_default_exercises,
)
from training_engine.distribution.engine import determine_workout_distribution
from training_engine.distribution.pace_validation import (
    MarathonPaceEstimate,
    parse_goal_time,
    progressive_marathon_pace,
    race_distance_km,
    select_reliable_marathon_pace,
    target_marathon_speed,
)
from training_engine.exceptions import CatalogueError, ProgramGenerationError, ValidationError
from training_engine.math.deload import DEFAULT_DELOAD_POLICY, DeloadPolicy, apply_deload, calculate_deload_schedule
from training_engine.math.dmax import detect_aerobic_threshold, detect_dmax
from training_engine.math.periodization import (
    calculate_phases,
    calculate_training_days_per_week,
    calculate_volume_targets,
    calculate_weekly_volume_progression,
    compute_plan_weeks,
)
from training_engine.math.zones import (
    calculate_training_zones,
    resolve_zones,
    validate_elite_paces,
    zone_confidence_warnings,
    zone_table_from_stored,
)
from training_engine.methodology.configs import get_methodology_config
from training_engine.methodology.selector import map_experience_to_athlete_level, select_methodology
from training_engine.models.enums import (
    MAX_PLAN_WEEKS,
    MAX_TRAINING_DAYS,
    MIN_PLAN_WEEKS,
    MIN_TRAINING_DAYS,
    Confidence,
    GoalType,
    IntensityUnit,
    MethodologyType,
    WorkoutType,
    ZoneSource,
)
from training_engine.models.lactate import ThresholdResult
from training_engine.models.params import ElitePaces, ProgramGenerationParams, RaceResult, TestRecord
from training_engine.models.plan import WeekDistributionParams, WorkoutPlanEntry
from training_engine.models.program import TrainingDay, TrainingProgram, TrainingWeek
from training_engine.models.workout import Workout
from training_engine.models.zones import ZoneTable
from training_engine.workout_builder.builder import EXERCISE_CATEGORIES, WorkoutBuilder
from training_engine.workout_builder.targets import zone_speed

logger = logging.getLogger(__name__)

_GOAL_LABELS = {
    GoalType.MARATHON: "Marathon",
    GoalType.HALF_MARATHON: "Half marathon",
    GoalType.TEN_K: "10K",
    GoalType.FIVE_K: "5K",
    GoalType.FITNESS: "Fitness",
    GoalType.CYCLING: "Cycling",
    GoalType.SKIING: "Skiing",
    GoalType.CUSTOM: "Custom",
}

_ENDURANCE_TYPE = {
    GoalType.CYCLING: WorkoutType.CYCLING,
    GoalType.SKIING: WorkoutType.SKIING,
}


def validate_program_params(params: ProgramGenerationParams) -> list[str]:
    """Return every problem with a generation request (empty = valid)."""
    errors = []
    if not MIN_PLAN_WEEKS <= params.duration_weeks <= MAX_PLAN_WEEKS:
        errors.append(
            f"duration_weeks must be {MIN_PLAN_WEEKS}-{MAX_PLAN_WEEKS}, "
            f"got {params.duration_weeks}"
        )
    if not MIN_TRAINING_DAYS <= params.training_days_per_week <= MAX_TRAINING_DAYS:
        errors.append(
            f"training_days_per_week must be {MIN_TRAINING_DAYS}-{MAX_TRAINING_DAYS}, "
            f"got {params.training_days_per_week}"
        )
    if params.current_weekly_volume is not None and params.current_weekly_volume < 0:
        errors.append("current_weekly_volume must not be negative")
    if params.longest_long_run_km is not None and params.longest_long_run_km <= 0:
        errors.append("longest_long_run_km must be positive")
    for name in ("strength_sessions_per_week", "core_sessions_per_week"):
        value = getattr(params, name)
        if value is not None and not 0 <= value <= 7:
            errors.append(f"{name} must be 0-7, got {value}")
    if (
        params.target_race_date is not None
        and params.start_date is not None
        and params.target_race_date < params.start_date
    ):
        errors.append("target_race_date is before start_date")
    elif params.target_race_date is not None and params.start_date is not None:
        race_week = compute_plan_weeks(params.start_date, params.target_race_date)
        if race_week != params.duration_weeks:
            errors.append(
                f"target_race_date falls in week {race_week}, "
                f"but duration_weeks is {params.duration_weeks}"
            )
    if params.target_time and race_distance_km(params.goal_type) is not None:
        if parse_goal_time(params.target_time, params.goal_type) is None:
            errors.append(f"target_time {params.target_time!r} is not a valid time")
    return errors


def generate_program_name(goal: GoalType, duration_weeks: int) -> str:
    return f"{_GOAL_LABELS[goal]} program ({duration_weeks} weeks)"


def _next_monday(from_date: date) -> date:
    """Return the date of the next Monday on or after *from_date*."""
    return from_date + timedelta(days=(7 - from_date.weekday()) % 7)


def plan_start_date(params: ProgramGenerationParams, today: date | None = None) -> date:
    """Explicit start date; else the Monday that puts the race in the last
    week; else the next Monday."""
    if params.start_date is not None:
        return params.start_date
    if params.target_race_date is not None:
        race = params.target_race_date
        race_monday = race - timedelta(days=race.weekday())
        return race_monday - timedelta(weeks=params.duration_weeks - 1)
    return _next_monday(today or date.today())


class ProgramGenerator:
    """Assembles complete periodized programs.

    Usage::

        generator = ProgramGenerator(catalogue, athlete_data)
        program = generator.generate(test_record, params)

    All steps run sequentially and in week order; the same inputs always
    produce the same program.
    """

    def __init__(
        self,
        catalogue: ExerciseCatalogue | None = None,
        athlete_data: AthleteDataSource | None = None,
        deload_policy: DeloadPolicy = DEFAULT_DELOAD_POLICY,
    ) -> None:
        self.catalogue = catalogue
        self.athlete_data = athlete_data
        self.deload_policy = deload_policy

    def generate(self, test: TestRecord, params: ProgramGenerationParams) -> TrainingProgram:
        """Generate a program from a test record and a request.

        Args:
            test: Stored lactate test (stages and/or previously computed zones).
            params: Generation request.

        Returns:
            A TrainingProgram with exactly ``params.duration_weeks`` weeks of
            seven days each.

        Raises:
            ValidationError: If the request or the test is malformed, or no
                training zones can be derived.
            ProgramGenerationError: If an internal per-week array comes up
                short.
        """
        errors = validate_program_params(params)
        if errors:
            raise ValidationError("; ".join(errors))

        warnings: list[str] = []
        goal = params.goal_type
        running = goal != GoalType.CYCLING
        start_date = plan_start_date(params)
        if params.start_date is None and start_date < date.today():
            warnings.append(
                f"Plan start {start_date} is in the past; the race is less than "
                f"{params.duration_weeks} weeks away"
            )

        logger.info("[1/6] Fetching athlete data for %s", params.athlete_id)
        race, elite = self._fetch_athlete_data(params)

        logger.info("[2/6] Resolving training zones")
        test_zones, threshold = self._test_zones(test, goal)
        if threshold is not None and threshold.warning:
            warnings.append(threshold.warning)
        zones = resolve_zones(test_zones, elite if running else None)
        if running:
            warnings.extend(zone_confidence_warnings(elite))

        logger.info("[3/6] Selecting methodology")
        athlete_level = params.athlete_level or (
            elite.athlete_level if validate_elite_paces(elite) and elite.athlete_level else None
        ) or map_experience_to_athlete_level(params.experience_level)
        selection = select_methodology(
            params.methodology, athlete_level, goal, elite if running else None, params.has_lactate_meter
        )
        methodology_type = selection.type
        if not running and methodology_type == MethodologyType.CANOVA:
            warnings.append("Canova is running-specific; using PYRAMIDAL for cycling")
            methodology_type = MethodologyType.PYRAMIDAL
        methodology = get_methodology_config(methodology_type, params.training_days_per_week)

        logger.info("[4/6] Planning phases, volume and deloads")
        weeks = params.duration_weeks
        phases = calculate_phases(weeks, methodology_type)
        base_volume, peak_volume = calculate_volume_targets(
            params.experience_level, goal, params.current_weekly_volume
        )
        progression = calculate_weekly_volume_progression(weeks, base_volume, peak_volume, phases)
        deloads = calculate_deload_schedule(weeks, athlete_level, methodology, phases, self.deload_policy)

        marathon_pace: MarathonPaceEstimate | None = None
        target_speed = None
        if running and zones.unit == IntensityUnit.SPEED:
            marathon_pace = self._marathon_pace(zones, test_zones, race, elite)
            if marathon_pace.warning:
                warnings.append(marathon_pace.warning)
            target_speed = target_marathon_speed(params.target_time, goal)

        logger.info("[5/6] Building %d weeks (%s)", weeks, methodology.name)
        builder = WorkoutBuilder(zones, _ENDURANCE_TYPE.get(goal, WorkoutType.RUNNING))
        training_weeks: list[TrainingWeek] = []
        for week_number in range(1, weeks + 1):
            if week_number > len(progression):
                logger.error("Volume progression has no entry for week %d", week_number)
                raise ProgramGenerationError(f"Missing week {week_number}", week_number)
            entry = progression[week_number - 1]

            volume_pct, is_deload = apply_deload(week_number, entry.volume_percentage, deloads)
            training_days = calculate_training_days_per_week(
                params.experience_level, entry.phase, params.training_days_per_week
            )
            ctx = WeekDistributionParams(
                week_number=week_number,
                total_weeks=weeks,
                phase=entry.phase,
                week_in_phase=phases.week_in_phase(week_number),
                training_days=training_days,
                experience=params.experience_level,
                goal=goal,
                methodology=methodology,
                athlete_level=athlete_level,
                volume=round(peak_volume * volume_pct / 100.0, 1),
                volume_percentage=volume_pct,
                is_deload=is_deload,
                easy_speed_kmh=zone_speed(zones, 2),
                marathon_pace_kmh=(
                    progressive_marathon_pace(marathon_pace.speed_kmh, target_speed, week_number, weeks)
                    if marathon_pace
                    else None
                ),
                strength_sessions=params.strength_sessions_per_week,
                core_sessions=params.core_sessions_per_week,
                strength_after_running=params.schedule_strength_after_running,
                core_after_running=params.schedule_core_after_running,
                longest_long_run_km=params.longest_long_run_km,
            )
            plan = determine_workout_distribution(ctx)
            training_weeks.append(TrainingWeek(
                week_number=week_number,
                phase=entry.phase,
                volume_percentage=volume_pct,
                volume=ctx.volume,
                focus="Deload: absorb training" if is_deload else entry.focus,
                training_days=training_days,
                is_deload=is_deload,
                days=self._build_days(plan, builder, ctx),
            ))

        logger.info("[6/6] Program assembled: %d weeks, %d warnings", weeks, len(warnings))
        return TrainingProgram(
            name=generate_program_name(goal, weeks),
            athlete_id=params.athlete_id,
            goal_type=goal,
            methodology=methodology_type,
            start_date=start_date,
            end_date=start_date + timedelta(days=7 * weeks - 1),
            zones=zones,
            weeks=tuple(training_weeks),
            test_id=test.test_id,
            threshold=threshold,
            target_race_date=params.target_race_date,
            warnings=tuple(warnings),
            notes="; ".join(n for n in (selection.reason, params.notes) if n),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _fetch_athlete_data(
        self, params: ProgramGenerationParams
    ) -> tuple[RaceResult | None, ElitePaces | None]:
        """Race result (request first, then data source) and reference paces."""
        race = params.recent_race
        elite = None
        if self.athlete_data is None:
            return race, elite
        if race is None:
            try:
                race = self.athlete_data.get_recent_race_result(params.athlete_id)
            except CatalogueError as exc:
                logger.warning("Race result lookup failed, continuing without: %s", exc)
        try:
            elite = self.athlete_data.get_elite_paces(params.athlete_id)
        except CatalogueError as exc:
            logger.warning("Reference pace lookup failed, continuing without: %s", exc)
        return race, elite

    def _test_zones(
        self, test: TestRecord, goal: GoalType
    ) -> tuple[ZoneTable | None, ThresholdResult | None]:
        """Zones from the test stages, else from zones stored on the record."""
        stages = test.stages
        if stages is not None and (stages.stage_count >= 4 or not test.stored_zones):
            threshold = detect_dmax(stages)
            aerobic = detect_aerobic_threshold(stages)
            zones = calculate_training_zones(stages, threshold, aerobic, test.max_hr)
            return zones, threshold
        if test.stored_zones:
            unit = test.stored_unit
            if unit is None:
                unit = IntensityUnit.POWER if goal == GoalType.CYCLING else IntensityUnit.SPEED
            return zone_table_from_stored(test.stored_zones, unit), None
        return None, None

    def _marathon_pace(
        self,
        zones: ZoneTable,
        test_zones: ZoneTable | None,
        race: RaceResult | None,
        elite: ElitePaces | None,
    ) -> MarathonPaceEstimate:
        if race is None and zones.source == ZoneSource.ELITE:
            return MarathonPaceEstimate(elite.marathon_kmh, "REFERENCE_PACES", elite.confidence)
        threshold_speed = None
        if test_zones is not None and test_zones.source == ZoneSource.TEST and test_zones.unit == IntensityUnit.SPEED:
            threshold_speed = test_zones.threshold_intensity
        estimate = select_reliable_marathon_pace(zones, threshold_speed, race)
        if estimate.confidence == Confidence.LOW:
            logger.warning("Marathon pace from %s (LOW confidence)", estimate.source)
        return estimate

    def _build_days(
        self,
        plan: list[WorkoutPlanEntry],
        builder: WorkoutBuilder,
        ctx: WeekDistributionParams,
    ) -> tuple[TrainingDay, ...]:
        days = []
        for day_number in range(1, 8):
            workouts: list[Workout] = []
            for entry in plan:
                if entry.day_number != day_number:
                    continue
                exercises: list[str] = []
                if entry.category in EXERCISE_CATEGORIES:
                    exercises = get_default_exercises(
                        self.catalogue, entry.category, entry.params.strength_focus
                    )
                workouts.append(builder.build(entry, ctx.phase, exercises))
            days.append(TrainingDay(
                day_number=day_number,
                workouts=tuple(workouts),
                notes="" if workouts else "Rest day",
            ))
        return tuple(days)
