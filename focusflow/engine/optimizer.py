"""Genetic-algorithm schedule optimizer for focusflow.

Searches the space of task orderings with a population of candidate
permutations:

    init -> evaluate -> elitism -> tournament selection
         -> ordered crossover -> swap mutation -> repeat

The best candidate ever seen is tracked across all generations, so a later
generation that regresses never loses it. Randomness comes from an injected
`random.Random` (or a seed), which makes runs reproducible.
"""

import logging
import math
import random
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from focusflow.engine.advice import generate_optimization_tips, identify_schedule_risks
from focusflow.engine.fitness import MAX_FITNESS, ScheduleFitnessEvaluator
from focusflow.engine.scheduler import materialize_schedule
from focusflow.engine.tiering import utc_now
from focusflow.models.constants import (
    DEFAULT_CROSSOVER_RATE,
    DEFAULT_GENERATIONS,
    DEFAULT_MUTATION_RATE,
    DEFAULT_POPULATION_SIZE,
    ELITE_FRACTION,
    TOURNAMENT_SIZE,
)
from focusflow.models.schedule import ScheduleConstraints, ScheduleOptimizationResult, WorkPatterns
from focusflow.models.task import Task

logger = logging.getLogger(__name__)

# A candidate schedule: an ordering of task ids
Candidate = Tuple[str, ...]


class InvalidConfiguration(ValueError):
    """Optimizer configuration error that can be surfaced as a 400."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def validate_configuration(
    generations: int,
    population_size: int,
    mutation_rate: float,
    crossover_rate: float,
) -> None:
    """Raise InvalidConfiguration for settings the search cannot run with."""
    if population_size < 2:
        raise InvalidConfiguration(
            f"population_size must be at least 2 (got {population_size})", field="population_size"
        )
    if generations < 1:
        raise InvalidConfiguration(f"generations must be at least 1 (got {generations})", field="generations")
    if not 0.0 <= mutation_rate <= 1.0:
        raise InvalidConfiguration(
            f"mutation_rate must be within [0, 1] (got {mutation_rate})", field="mutation_rate"
        )
    if not 0.0 <= crossover_rate <= 1.0:
        raise InvalidConfiguration(
            f"crossover_rate must be within [0, 1] (got {crossover_rate})", field="crossover_rate"
        )


class GeneticScheduleOptimizer:
    """Finds a good task ordering with a genetic algorithm.

    Args:
        rng: Random source shared by all calls (takes precedence over seed)
        seed: Seed for a fresh random source per optimize() call
        workers: Threads used to evaluate a generation's fitness (1 = sequential)
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        workers: int = 1,
    ):
        if workers < 1:
            raise InvalidConfiguration(f"workers must be at least 1 (got {workers})", field="workers")
        self._rng = rng
        self._seed = seed
        self.workers = workers

    def _random_source(self) -> random.Random:
        if self._rng is not None:
            return self._rng
        return random.Random(self._seed)

    def optimize(
        self,
        tasks: Sequence[Task],
        constraints: Optional[ScheduleConstraints] = None,
        work_patterns: Optional[WorkPatterns] = None,
        generations: int = DEFAULT_GENERATIONS,
        population_size: int = DEFAULT_POPULATION_SIZE,
        mutation_rate: float = DEFAULT_MUTATION_RATE,
        crossover_rate: float = DEFAULT_CROSSOVER_RATE,
        start_time: Optional[datetime] = None,
        confidences: Optional[Dict[str, float]] = None,
    ) -> ScheduleOptimizationResult:
        """Optimize the ordering of tasks.

        Args:
            tasks: Tasks to order (identifiers must be unique)
            constraints: Work-hours and peak-hour constraints
            work_patterns: Observed work habits
            generations: Number of generations to run
            population_size: Candidates per generation
            mutation_rate: Probability of a swap mutation per child
            crossover_rate: Probability of crossover per child
            start_time: Instant the schedule starts (defaults to now)
            confidences: Optional per-task confidence for materialization

        Returns:
            ScheduleOptimizationResult for the best ordering found

        Raises:
            InvalidConfiguration: If the search settings or task ids are invalid
        """
        try:
            validate_configuration(generations, population_size, mutation_rate, crossover_rate)
        except InvalidConfiguration as e:
            logger.error(f"Invalid optimizer configuration: {str(e)}")
            raise

        tasks_by_id = {task.id: task for task in tasks}
        if len(tasks_by_id) != len(tasks):
            logger.error("Task list contains duplicate identifiers")
            raise InvalidConfiguration("Task identifiers must be unique", field="tasks")

        constraints = constraints or ScheduleConstraints()
        work_patterns = work_patterns or WorkPatterns()
        now = start_time or utc_now()
        evaluator = ScheduleFitnessEvaluator(constraints, work_patterns, now)

        if not tasks:
            return ScheduleOptimizationResult()

        if len(tasks) == 1:
            fitness = evaluator.evaluate(tasks)
            return self._build_result(
                list(tasks), fitness, None, [fitness], constraints, work_patterns, now, confidences
            )

        rng = self._random_source()
        task_ids = [task.id for task in tasks]
        population = self._initialize_population(task_ids, population_size, rng)

        best = population[0]
        best_fitness = evaluator.evaluate(self._to_tasks(best, tasks_by_id))
        fitness_history: List[float] = []

        executor = ThreadPoolExecutor(max_workers=self.workers) if self.workers > 1 else None
        try:
            for generation in range(generations):
                scores = self._evaluate_population(population, evaluator, tasks_by_id, executor)

                # Single-writer reduction of the generation's results
                generation_best = max(range(len(population)), key=scores.__getitem__)
                if scores[generation_best] > best_fitness:
                    best_fitness = scores[generation_best]
                    best = population[generation_best]
                fitness_history.append(best_fitness)

                logger.debug(
                    f"Generation {generation + 1}/{generations}: "
                    f"generation best {scores[generation_best]:.2f}, global best {best_fitness:.2f}"
                )

                population = self._next_generation(population, scores, rng, mutation_rate, crossover_rate)

            final_scores = self._evaluate_population(population, evaluator, tasks_by_id, executor)
        finally:
            if executor is not None:
                executor.shutdown()

        ranked = sorted(range(len(population)), key=lambda i: final_scores[i], reverse=True)
        runner_up = population[ranked[1]] if len(ranked) >= 2 else None

        logger.debug(f"Optimized {len(tasks)} tasks over {generations} generations: fitness {best_fitness:.2f}")

        return self._build_result(
            self._to_tasks(best, tasks_by_id),
            best_fitness,
            self._to_tasks(runner_up, tasks_by_id) if runner_up is not None else None,
            fitness_history,
            constraints,
            work_patterns,
            now,
            confidences,
        )

    def _build_result(
        self,
        ordering: List[Task],
        fitness: float,
        alternative: Optional[List[Task]],
        fitness_history: List[float],
        constraints: ScheduleConstraints,
        work_patterns: WorkPatterns,
        now: datetime,
        confidences: Optional[Dict[str, float]],
    ) -> ScheduleOptimizationResult:
        return ScheduleOptimizationResult(
            best_schedule=materialize_schedule(ordering, start_time=now, confidences=confidences),
            fitness_score=min(max(fitness / MAX_FITNESS, 0.0), 1.0),
            alternatives=(
                materialize_schedule(alternative, start_time=now, confidences=confidences)
                if alternative
                else []
            ),
            tips=generate_optimization_tips(ordering, work_patterns),
            risks=identify_schedule_risks(ordering, constraints, now),
            fitness_history=fitness_history,
        )

    @staticmethod
    def _to_tasks(candidate: Candidate, tasks_by_id: Dict[str, Task]) -> List[Task]:
        return [tasks_by_id[task_id] for task_id in candidate]

    @staticmethod
    def _initialize_population(
        task_ids: List[str], population_size: int, rng: random.Random
    ) -> List[Candidate]:
        """Independent random permutations of the task ids."""
        return [tuple(rng.sample(task_ids, len(task_ids))) for _ in range(population_size)]

    def _evaluate_population(
        self,
        population: List[Candidate],
        evaluator: ScheduleFitnessEvaluator,
        tasks_by_id: Dict[str, Task],
        executor: Optional[ThreadPoolExecutor],
    ) -> List[float]:
        snapshot = tuple(population)

        def score(candidate: Candidate) -> float:
            return evaluator.evaluate(self._to_tasks(candidate, tasks_by_id))

        if executor is None:
            return [score(candidate) for candidate in snapshot]
        return list(executor.map(score, snapshot))

    def _next_generation(
        self,
        population: List[Candidate],
        scores: List[float],
        rng: random.Random,
        mutation_rate: float,
        crossover_rate: float,
    ) -> List[Candidate]:
        """Elites carried over unchanged, the rest bred from tournament winners."""
        population_size = len(population)
        elite_count = math.ceil(population_size * ELITE_FRACTION)

        ranked = sorted(range(population_size), key=lambda i: scores[i], reverse=True)
        next_population = [population[i] for i in ranked[:elite_count]]

        while len(next_population) < population_size:
            parent1 = self._tournament_selection(population, scores, rng)
            parent2 = self._tournament_selection(population, scores, rng)

            if rng.random() < crossover_rate:
                offspring = self._crossover(parent1, parent2, rng)
            else:
                offspring = parent1 if rng.random() < 0.5 else parent2

            if rng.random() < mutation_rate:
                offspring = self._mutate(offspring, rng)

            next_population.append(offspring)

        return next_population

    @staticmethod
    def _tournament_selection(
        population: List[Candidate], scores: List[float], rng: random.Random
    ) -> Candidate:
        """Fittest of TOURNAMENT_SIZE candidates sampled uniformly with replacement."""
        best_index = rng.randrange(len(population))
        for _ in range(TOURNAMENT_SIZE - 1):
            index = rng.randrange(len(population))
            if scores[index] > scores[best_index]:
                best_index = index
        return population[best_index]

    @staticmethod
    def _crossover(parent1: Candidate, parent2: Candidate, rng: random.Random) -> Candidate:
        """Ordered crossover: prefix of parent1, then parent2's remaining ids in its order."""
        cut = rng.randrange(len(parent1))
        child = list(parent1[:cut])
        used = set(child)
        child.extend(task_id for task_id in parent2 if task_id not in used)
        return tuple(child)

    @staticmethod
    def _mutate(candidate: Candidate, rng: random.Random) -> Candidate:
        """Swap two randomly chosen positions."""
        order = list(candidate)
        if len(order) >= 2:
            i = rng.randrange(len(order))
            j = rng.randrange(len(order))
            order[i], order[j] = order[j], order[i]
        return tuple(order)
