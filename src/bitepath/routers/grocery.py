"""API routes for grocery lists, struck items and manual items."""

from datetime import date
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from bitepath.config import DisplaySystem, get_settings, resolve_display_system
from bitepath.logging_config import LoggingContext, get_logger
from bitepath.plan.formatter import FULL_VIEW, TODAY_VIEW, DisplayListItem, ViewConfig
from bitepath.plan.grocery_list import GroceryList, build_range_list, week_range
from bitepath.schemas import ManualGroceryItem, MealPlanRow
from bitepath.storage.kv import JsonFileStore, KeyValueStore
from bitepath.storage.stores import ManualItemStore, StruckItemStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/grocery-list", tags=["grocery-list"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class GroceryListRequest(BaseModel):
    """Meal-plan rows and the range to build a grocery list for."""

    meals: list[MealPlanRow] = Field(default_factory=list)
    start_date: date | None = Field(None, description="First day; end defaults to week end")
    end_date: date | None = None
    display_system: DisplaySystem | None = Field(
        None, description="Preferred unit system; falls back to the configured default"
    )
    grouped: bool = True


class TodayGroceryListRequest(BaseModel):
    """Meal-plan rows and the single day to list."""

    meals: list[MealPlanRow] = Field(default_factory=list)
    day: date | None = Field(None, description="Defaults to today")
    display_system: DisplaySystem | None = None
    grouped: bool = True


class DisplayItemResponse(BaseModel):
    """A single printable grocery-list entry."""

    item_name: str
    details_text: str
    category: str
    unique_key: str
    tooltip_text: str
    is_manual: bool = False
    muted: bool = False
    struck: bool = False


class GrocerySectionResponse(BaseModel):
    """A titled group of entries."""

    title: str
    items: list[DisplayItemResponse]


class GroceryListResponse(BaseModel):
    """Computed grocery list with strike state."""

    view: str
    display_system: DisplaySystem
    start_date: date | None = None
    end_date: date | None = None
    items: list[DisplayItemResponse]
    sections: list[GrocerySectionResponse] = Field(default_factory=list)
    struck_count: int = 0


class ToggleRequest(BaseModel):
    """Strike or unstrike one item."""

    unique_key: str = Field(min_length=1)


class ToggleResponse(BaseModel):
    unique_key: str
    struck: bool


class ManualItemCreateRequest(BaseModel):
    """A user-entered grocery item."""

    name: str = Field(min_length=1)
    quantity: str = ""
    unit: str = ""


# =============================================================================
# Dependencies
# =============================================================================


@lru_cache
def get_kv_store() -> KeyValueStore:
    """Get the shared client-local store."""
    return JsonFileStore(get_settings().storage_path)


def get_struck_store(store: KeyValueStore = Depends(get_kv_store)) -> StruckItemStore:
    return StruckItemStore(store)


def get_manual_store(store: KeyValueStore = Depends(get_kv_store)) -> ManualItemStore:
    return ManualItemStore(store)


# =============================================================================
# Helper Functions
# =============================================================================


def _item_response(item: DisplayListItem, struck: set[str]) -> DisplayItemResponse:
    return DisplayItemResponse(
        item_name=item.item_name,
        details_text=item.details_text,
        category=item.category,
        unique_key=item.unique_key,
        tooltip_text=item.tooltip_text,
        is_manual=item.is_manual,
        muted=item.muted,
        struck=item.unique_key in struck,
    )


def _list_response(
    grocery_list: GroceryList,
    global_struck: set[str],
    grouped: bool,
    start: date | None,
    end: date | None,
) -> GroceryListResponse:
    struck = global_struck & grocery_list.unique_keys()
    sections = []
    if grouped:
        sections = [
            GrocerySectionResponse(
                title=title,
                items=[_item_response(item, struck) for item in items],
            )
            for title, items in grocery_list.sections()
        ]
    return GroceryListResponse(
        view=grocery_list.view.name,
        display_system=grocery_list.display_system,
        start_date=start,
        end_date=end,
        items=[_item_response(item, struck) for item in grocery_list.items],
        sections=sections,
        struck_count=len(struck),
    )


def _view(base: ViewConfig, grouped: bool) -> ViewConfig:
    return base if grouped else ViewConfig(base.name, base.separator, categorized=False)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=GroceryListResponse)
def build_list(
    request: GroceryListRequest,
    struck_items: StruckItemStore = Depends(get_struck_store),
    manual_items: ManualItemStore = Depends(get_manual_store),
) -> GroceryListResponse:
    """
    Build the aggregated grocery list for a date range.

    When only start_date is given the range runs to the end of that week.
    Without dates every supplied meal is included.
    """
    start, end = request.start_date, request.end_date
    if start is not None and end is None:
        end = week_range(start)[1]
    if start is not None and end is not None and end < start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date",
        )

    display_system = resolve_display_system(request.display_system)
    with LoggingContext(view=FULL_VIEW.name):
        logger.info(
            f"Building grocery list: {len(request.meals)} meals, {start} to {end}, "
            f"{display_system}"
        )
        grocery_list = build_range_list(
            request.meals,
            start,
            end,
            display_system,
            manual_items.load(),
            _view(FULL_VIEW, request.grouped),
        )
    return _list_response(grocery_list, struck_items.read(), request.grouped, start, end)


@router.post("/today", response_model=GroceryListResponse)
def build_today_list(
    request: TodayGroceryListRequest,
    struck_items: StruckItemStore = Depends(get_struck_store),
    manual_items: ManualItemStore = Depends(get_manual_store),
) -> GroceryListResponse:
    """Build the grocery list for a single day."""
    day = request.day or date.today()
    display_system = resolve_display_system(request.display_system)
    with LoggingContext(view=TODAY_VIEW.name):
        grocery_list = build_range_list(
            request.meals,
            day,
            day,
            display_system,
            manual_items.load(),
            _view(TODAY_VIEW, request.grouped),
        )
    return _list_response(grocery_list, struck_items.read(), request.grouped, day, day)


@router.get("/struck", response_model=list[str])
def list_struck(
    struck_items: StruckItemStore = Depends(get_struck_store),
) -> list[str]:
    """List every struck key, including keys not on any current list."""
    return sorted(struck_items.read())


@router.post("/struck/toggle", response_model=ToggleResponse)
def toggle_struck(
    request: ToggleRequest,
    struck_items: StruckItemStore = Depends(get_struck_store),
) -> ToggleResponse:
    """Strike or unstrike an item."""
    struck_items.toggle(request.unique_key)
    return ToggleResponse(
        unique_key=request.unique_key,
        struck=request.unique_key in struck_items.read(),
    )


@router.get("/manual-items", response_model=list[ManualGroceryItem])
def list_manual_items(
    manual_items: ManualItemStore = Depends(get_manual_store),
) -> list[ManualGroceryItem]:
    """List manually added items in insertion order."""
    return manual_items.load()


@router.post(
    "/manual-items",
    response_model=ManualGroceryItem,
    status_code=status.HTTP_201_CREATED,
)
def add_manual_item(
    request: ManualItemCreateRequest,
    manual_items: ManualItemStore = Depends(get_manual_store),
) -> ManualGroceryItem:
    """Add an item to the manual grocery list."""
    try:
        return manual_items.add(request.name, request.quantity, request.unit)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
