from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class Dataset(BaseModel):
    label: str
    data: List[int]


class ChartSeries(BaseModel):
    labels: List[str]
    datasets: List[Dataset]


class AggregateResponse(BaseModel):
    eventTypeCounts: Dict[str, int]
    sourceCounts: Dict[str, int]
    timestamps: List[Any]
    alertCategoryCounts: Dict[str, int]
    sourceCategoryMatrix: Dict[str, Dict[str, int]]
    hourBucketCategoryMatrix: Dict[str, Dict[str, int]]
    hourBucketAlertCount: Dict[str, int]
    recordCount: int = Field(ge=0)
    alertCount: int = Field(ge=0)
    unbucketedAlerts: int = Field(ge=0)
    malformedTimestamps: int = Field(ge=0)


class ViewsResponse(BaseModel):
    eventTypes: ChartSeries
    alertCategories: ChartSeries
    sourceCategories: ChartSeries
    hourCategories: ChartSeries
    alertFrequency: ChartSeries
