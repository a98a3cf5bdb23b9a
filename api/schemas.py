from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from vision.types import AnalysisResult


class _Request(BaseModel):
    """Fields are only checked for presence by the routes, so any JSON value is accepted."""

    model_config = ConfigDict(populate_by_name=True)


class AnalyzeImageRequest(_Request):
    image_url: Any = Field(None, alias="imageUrl")
    features: Any = None


class QueryOraRequest(_Request):
    image_analysis: Any = Field(None, alias="imageAnalysis")
    query: Any = None


class AnalyzeAndQueryRequest(_Request):
    image_url: Any = Field(None, alias="imageUrl")
    query: Any = None
    features: Any = None


class AnalyzeImageResponse(BaseModel):
    success: bool
    data: Optional[AnalysisResult] = None
    error: Optional[str] = None


class AnalyzeAndQueryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    image_analysis: AnalysisResult = Field(alias="imageAnalysis")
    # Remote ORA answers are passed through untouched.
    ora_response: Any = Field(alias="oraResponse")
