"""Decision Result — plain-data record of one end-to-end decision run."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from intent_kernel.models.contract import ServiceContract
from intent_kernel.models.placement import PlacementDecision
from intent_kernel.models.priority import PriorityVector
from intent_kernel.models.resources import CandidateConfiguration


class DecisionResult(BaseModel):
    """Everything a driver needs to report on a single request."""

    id: str
    request_text: str
    user_id: str
    intent: PriorityVector                  # Extracted from the text
    predicted_intent: PriorityVector        # Forecast from the user's history
    consistency: float
    contract: ServiceContract
    renegotiated_contract: Optional[ServiceContract] = None
    selected_index: int
    selected_candidate: CandidateConfiguration
    tradeoff_score: float
    pareto_score: float
    meets_contract: bool
    placement: Optional[PlacementDecision] = None
    decided_at: datetime

    @property
    def effective_contract(self) -> ServiceContract:
        """The contract in force after any renegotiation."""
        return self.renegotiated_contract or self.contract
