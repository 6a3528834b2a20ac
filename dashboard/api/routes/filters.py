"""API routes for the saved date-range filter."""

from fastapi import APIRouter

from dashboard.core.dependencies import FilterStoreDep, SettingsDep
from dashboard.domain.models.filters import DateRangeFilter

router = APIRouter(prefix="/filters", tags=["filters"])


@router.get("/date-range", response_model=DateRangeFilter)
def get_date_range_filter(store: FilterStoreDep, settings: SettingsDep) -> DateRangeFilter:
    """The last applied filter, or the default range when none was saved."""
    return store.load() or DateRangeFilter.default_range(settings.backend.default_range_days)


@router.put("/date-range", response_model=DateRangeFilter)
def save_date_range_filter(
    date_range: DateRangeFilter, store: FilterStoreDep
) -> DateRangeFilter:
    """Validate and persist a filter; invalid bounds are rejected with 400."""
    date_range.to_instants()
    store.save(date_range)
    return date_range
