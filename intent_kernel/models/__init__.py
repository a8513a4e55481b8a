"""Intent Kernel data models."""

from intent_kernel.models.contract import ProviderOffering, ServiceContract
from intent_kernel.models.decision import DecisionResult
from intent_kernel.models.placement import HostComparison, PlacementDecision
from intent_kernel.models.priority import DIMENSIONS, PriorityVector, clamp_unit
from intent_kernel.models.resources import (
    CandidateConfiguration,
    HostDescriptor,
    VmRequest,
)
from intent_kernel.models.vocabulary import DEFAULT_VOCABULARY, KeywordVocabulary

__all__ = [
    "CandidateConfiguration",
    "DEFAULT_VOCABULARY",
    "DIMENSIONS",
    "DecisionResult",
    "HostComparison",
    "HostDescriptor",
    "KeywordVocabulary",
    "PlacementDecision",
    "PriorityVector",
    "ProviderOffering",
    "ServiceContract",
    "VmRequest",
    "clamp_unit",
]
