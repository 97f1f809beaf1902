"""Subject-balanced mock exam assembly."""

import random
from collections import defaultdict
from typing import Any, Sequence, TypeVar

from compass.mocks.contracts import MockDistributionConfig
from compass.models.question import Subject
from compass.schemas.question import QuestionOut

T = TypeVar("T")


def shuffled(items: Sequence[T], rng: random.Random) -> list[T]:
    """Return a Fisher-Yates shuffled copy of ``items`` drawn from ``rng``."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def generate_mock_questions(
    pool: Sequence[QuestionOut],
    config: MockDistributionConfig,
    rng: random.Random,
) -> tuple[list[QuestionOut], dict[str, Any], list[dict[str, Any]]]:
    """
    Assemble a mock exam whose subject mix follows the configured weights.

    Args:
        pool: Every available question
        config: Target size and per-subject weights
        rng: Random source (seeded in tests)

    Returns:
        Tuple of (questions, meta, warnings)
        - questions: Selected questions, subjects interleaved
        - meta: Coverage achieved per subject and fill counts
        - warnings: List of warning dicts
    """
    warnings: list[dict[str, Any]] = []
    total_target = min(config.total_questions, len(pool))

    # Step 1: Partition pool by subject
    by_subject: dict[Subject, list[QuestionOut]] = defaultdict(list)
    for question in pool:
        by_subject[question.subject].append(question)

    # Step 2: Allocate per subject
    allocations = _allocate_per_subject(config, total_target, rng)

    # Step 3: Take up to the allocation from each shuffled subject pool
    selected: list[QuestionOut] = []
    coverage_achieved: dict[str, int] = {}
    for subject, count in allocations.items():
        candidates = by_subject.get(subject, [])
        taken = shuffled(candidates, rng)[:count]
        if len(taken) < count:
            warnings.append({
                "type": "subject_insufficient_candidates",
                "subject": subject.value,
                "requested": count,
                "available": len(candidates),
            })
        selected.extend(taken)
        coverage_achieved[subject.value] = len(taken)

    # Step 4: Fill any shortfall from the unused questions
    backfilled = 0
    if len(selected) < total_target:
        shortfall = total_target - len(selected)
        fill = _backfill_questions(pool, selected, shortfall, rng)
        backfilled = len(fill)
        selected.extend(fill)
        warnings.append({
            "type": "coverage_underfilled",
            "requested": total_target,
            "achieved": len(selected),
            "shortfall": shortfall,
        })

    # Step 5: Interleave subjects
    questions = shuffled(selected, rng)

    meta: dict[str, Any] = {
        "allocations": {subject.value: count for subject, count in allocations.items()},
        "coverage_achieved": coverage_achieved,
        "backfilled": backfilled,
        "total_candidates": len(pool),
        "total_selected": len(questions),
    }

    return questions, meta, warnings


def _allocate_per_subject(
    config: MockDistributionConfig,
    total_questions: int,
    rng: random.Random,
) -> dict[Subject, int]:
    """Allocate question counts per subject via round + remainder distribution."""
    allocations: dict[Subject, int] = {}
    allocated = 0
    for subject, weight in config.weight_map().items():
        count = round(weight * total_questions / 100)
        allocations[subject] = count
        allocated += count

    remainder = total_questions - allocated
    if remainder != 0 and allocations:
        subjects = shuffled(list(allocations.keys()), rng)
        step = 1 if remainder > 0 else -1
        i = 0
        # Never take a subject below zero; keep cycling until the total matches
        while remainder != 0:
            subject = subjects[i % len(subjects)]
            if step > 0 or allocations[subject] > 0:
                allocations[subject] += step
                remainder -= step
            i += 1

    return allocations


def _backfill_questions(
    pool: Sequence[QuestionOut],
    already_selected: list[QuestionOut],
    shortfall: int,
    rng: random.Random,
) -> list[QuestionOut]:
    """Backfill from questions not yet selected, regardless of subject."""
    selected_ids = {q.id for q in already_selected}
    unused = [q for q in pool if q.id not in selected_ids]
    return shuffled(unused, rng)[:shortfall]
