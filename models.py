# slide_service/models.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentDensity(str, Enum):
    CONCISE = "concise"
    BALANCED = "balanced"
    COMPREHENSIVE = "comprehensive"


class TargetAudience(str, Enum):
    CASUAL = "casual"
    EDUCATIONAL = "educational"
    SPECIALIZED = "specialized"
    BUSINESS = "business"
    LEADERSHIP = "leadership"


class TransformOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content_density: ContentDensity = Field(default=ContentDensity.CONCISE, alias="contentDensity")
    target_audience: TargetAudience = Field(default=TargetAudience.CASUAL, alias="targetAudience")
    # Theme id, checked by the renderer rather than here
    visual_style: str = Field(default="default", alias="visualStyle")


class Slide(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    title: str = Field(min_length=1)
    content: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class Presentation(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    slides: List[Slide] = Field(default_factory=list)


class VisualStyle(BaseModel):
    id: str
    name: str
    description: str
    preview: Optional[str] = None


AVAILABLE_STYLES: List[VisualStyle] = [
    VisualStyle(id="default", name="Classic", description="Clean and minimal design with a white background"),
    VisualStyle(id="gaia", name="Corporate", description="Professional style with blue accent colors"),
    VisualStyle(id="uncover", name="Modern", description="Contemporary dark theme with subtle gradients"),
]

DENSITY_OPTIONS = [{"value": d.value, "label": d.value.capitalize()} for d in ContentDensity]
AUDIENCE_OPTIONS = [{"value": a.value, "label": a.value.capitalize()} for a in TargetAudience]
