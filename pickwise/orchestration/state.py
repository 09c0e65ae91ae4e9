"""LangGraph state schema for the comparison workflow."""
from typing import Any, Dict, List, Optional, TypedDict

from pickwise.app.schemas import CompareRequest, ComparisonResult, IntentPrediction, LocalSearchTerms


class CompareState(TypedDict, total=False):
    """State schema for the LangGraph comparison workflow."""

    # Input
    request: CompareRequest
    current_date: str

    # Intent classification
    intent: Optional[IntentPrediction]
    search_terms: Optional[LocalSearchTerms]

    # Output
    products: List[ComparisonResult]
    features: List[str]
    message: Optional[str]

    # Control flags
    broadened: bool  # broader-interpretation retry already used
    service_error: Optional[str]  # upstream AI/places failure, skips the broaden retry

    # Metadata
    tool_calls: List[Dict[str, Any]]
    meta: Dict[str, Any]
