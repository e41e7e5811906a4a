from typing import List, Optional
from pydantic import BaseModel, Field


class Price(BaseModel):
    current_price: float
    currency: str
    is_range: bool
    formatted: str


class ProductOut(BaseModel):
    id: str
    name: str
    type_name: str
    main_image_url: str
    main_image_alt: Optional[str]
    contextual_image_url: Optional[str]
    price: Price
    rating_value: Optional[float]
    rating_count: Optional[int]
    pip_url: str
    starting_guess: int


class DailyProductsResponse(BaseModel):
    date: str
    country: str
    items: List[ProductOut]


class ScoreRequest(BaseModel):
    guess: float = Field(ge=0)
    actual: float = Field(gt=0)


class ScoreResponse(BaseModel):
    guess: float
    actual: float
    accuracy: float
    message: str
    emoji: str


class Progress(BaseModel):
    date: str
    current_round: int = Field(default=0, ge=0)
    scores: List[float] = Field(default_factory=list)
    completed: bool = False


class ShareRequest(BaseModel):
    scores: List[float]
    origin: str
    date: Optional[str] = None


class ShareResponse(BaseModel):
    text: str
    total_score: int


class ErrorResponse(BaseModel):
    error: str
