"""Keyword Vocabulary — keyword-to-weight tables for the intent extractor."""

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class KeywordVocabulary(BaseModel):
    """
    Four disjoint keyword tables, one per priority dimension.

    Weights lie in (0, 1]. Keywords are matched by lower-case substring
    containment, so multi-word phrases such as "low latency" are allowed.
    Tables are read-only once built; a keyword may belong to one table only.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    cost: Mapping[str, float] = {}
    latency: Mapping[str, float] = {}
    security: Mapping[str, float] = {}
    carbon: Mapping[str, float] = {}

    @field_validator("cost", "latency", "security", "carbon")
    @classmethod
    def _check_weights(cls, table: Mapping[str, float]) -> Mapping[str, float]:
        normalized: Dict[str, float] = {}
        for keyword, weight in table.items():
            if not 0.0 < weight <= 1.0:
                raise ValueError(f"Keyword '{keyword}' weight {weight} not in (0, 1]")
            normalized[keyword.lower()] = weight
        return MappingProxyType(normalized)

    @model_validator(mode="after")
    def _check_disjoint(self) -> "KeywordVocabulary":
        owner: Dict[str, str] = {}
        for dimension, table in self.tables():
            for keyword in table:
                if keyword in owner:
                    raise ValueError(
                        f"Keyword '{keyword}' appears in both "
                        f"'{owner[keyword]}' and '{dimension}'"
                    )
                owner[keyword] = dimension
        return self

    def tables(self) -> Iterator[Tuple[str, Mapping[str, float]]]:
        yield "cost", self.cost
        yield "latency", self.latency
        yield "security", self.security
        yield "carbon", self.carbon


DEFAULT_VOCABULARY = KeywordVocabulary(
    cost={
        "cheap": 0.9,
        "budget": 0.85,
        "affordable": 0.8,
        "economical": 0.8,
        "low cost": 0.9,
        "save money": 0.85,
        "inexpensive": 0.8,
        "cost-effective": 0.75,
        "minimize cost": 0.9,
        "free tier": 0.95,
    },
    latency={
        "fast": 0.9,
        "quick": 0.85,
        "rapid": 0.85,
        "low latency": 0.95,
        "real-time": 0.95,
        "responsive": 0.8,
        "high performance": 0.9,
        "speed": 0.85,
        "instant": 0.9,
        "gaming": 0.85,
        "streaming": 0.8,
    },
    security={
        "secure": 0.9,
        "encrypted": 0.85,
        "private": 0.8,
        "confidential": 0.85,
        "compliant": 0.8,
        "hipaa": 0.95,
        "gdpr": 0.9,
        "isolated": 0.85,
        "protected": 0.8,
        "banking": 0.9,
        "healthcare": 0.9,
    },
    carbon={
        "green": 0.9,
        "sustainable": 0.85,
        "eco": 0.85,
        "carbon neutral": 0.95,
        "renewable": 0.9,
        "environment": 0.8,
        "low carbon": 0.9,
        "energy efficient": 0.85,
    },
)
