"""Mock board weighting contracts and validation."""

from pydantic import BaseModel, Field, model_validator

from compass.models.question import Subject

# Percentage contribution of each subject to the weighted mock score.
# Fixed by the licensure exam table of specifications; sums to 100.
SUBJECT_WEIGHTS: dict[Subject, int] = {
    Subject.LIBRARY_ORGANIZATION: 20,
    Subject.REFERENCE_SERVICES: 20,
    Subject.CATALOGING: 20,
    Subject.INDEXING: 15,
    Subject.SELECTION: 15,
    Subject.INFORMATION_TECHNOLOGY: 10,
}


class SubjectWeight(BaseModel):
    """Coverage item with a percentage weight."""

    subject: Subject = Field(..., description="Subject area")
    weight: int = Field(..., ge=0, le=100, description="Percentage weight (0-100)")


class MockDistributionConfig(BaseModel):
    """Subject distribution used to assemble a mock exam from the full pool."""

    total_questions: int = Field(..., ge=1, description="Target exam size")
    weights: list[SubjectWeight] = Field(..., min_length=1, description="Per-subject weights")

    @model_validator(mode="after")
    def validate_sum(self) -> "MockDistributionConfig":
        """Validate weights sum to 100."""
        total = sum(item.weight for item in self.weights)
        if total != 100:
            raise ValueError(f"weights must sum to 100, got {total}")
        return self

    @classmethod
    def default(cls, total_questions: int) -> "MockDistributionConfig":
        """Distribution using the standard subject weight table."""
        return cls(
            total_questions=total_questions,
            weights=[
                SubjectWeight(subject=subject, weight=weight)
                for subject, weight in SUBJECT_WEIGHTS.items()
            ],
        )

    def weight_map(self) -> dict[Subject, int]:
        return {item.subject: item.weight for item in self.weights}
