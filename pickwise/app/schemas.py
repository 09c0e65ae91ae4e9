from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

FeatureValue = Union[bool, str]
BadgeColor = Literal["green", "blue", "orange", "purple"]
Intent = Literal["local_only", "product_only", "local_first"]


class CompareRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    search_query: str = Field(..., alias="searchQuery", min_length=1)

    @field_validator("search_query")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("searchQuery must not be blank")
        return value


class ComparisonResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = "No data available"
    pricing: str = "Contact for pricing"
    rating: None = None  # never populated, sources can't be verified
    website: str = ""
    features: Dict[str, FeatureValue] = Field(default_factory=dict)
    badge: Optional[str] = None
    badge_color: Optional[BadgeColor] = Field(None, alias="badgeColor")


class ComparisonResponse(BaseModel):
    products: List[ComparisonResult] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    message: Optional[str] = None


class CompareResponse(ComparisonResponse):
    id: int


class SearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    search_query: str = Field(..., alias="searchQuery")
    results: Optional[List[ComparisonResult]] = None
    created_at: str = Field(..., alias="createdAt")


class PlaceholderExamples(BaseModel):
    examples: List[str]


class ErrorMessage(BaseModel):
    message: str


class IntentPrediction(BaseModel):
    intent: Intent
    confidence: float = Field(..., ge=0, le=1)
    reasoning: Optional[str] = None


class LocalSearchTerms(BaseModel):
    business_type: str
    location: Optional[str] = None


class FeatureLabels(BaseModel):
    labels: Dict[str, str] = Field(default_factory=dict)
