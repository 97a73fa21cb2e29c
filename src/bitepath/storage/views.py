"""Per-view grocery list state kept in sync through the shared store."""

from datetime import date

from bitepath.config import DisplaySystem, get_settings
from bitepath.logging_config import LoggingContext, get_logger
from bitepath.plan.formatter import FULL_VIEW, TODAY_VIEW, ViewConfig
from bitepath.plan.grocery_list import GroceryList, build_range_list, week_range
from bitepath.schemas import MealPlanRow
from bitepath.storage.kv import StorageEvent
from bitepath.storage.stores import ManualItemStore, StruckItemStore

logger = get_logger(__name__)


class GroceryListView:
    """
    The reactive state of one open grocery list.

    The view recomputes its list whenever its inputs or the manual items
    change, and keeps a local struck set: the global struck set filtered to
    the keys currently on its own list.
    """

    def __init__(
        self,
        struck_items: StruckItemStore,
        manual_items: ManualItemStore,
        view: ViewConfig = FULL_VIEW,
    ):
        self.view = view
        self._struck_items = struck_items
        self._manual_items = manual_items
        self._rows: list[MealPlanRow] = []
        self._start: date | None = None
        self._end: date | None = None
        self.display_system: DisplaySystem = get_settings().default_display_system
        self.grocery_list = GroceryList(view=view, display_system=self.display_system)
        self.struck: set[str] = set()
        self._unsubscribe = struck_items.subscribe(self._on_storage_change)

    def refresh(
        self,
        rows: list[MealPlanRow],
        start: date | None = None,
        end: date | None = None,
        display_system: DisplaySystem | None = None,
    ) -> GroceryList:
        """Recompute the list for new meal-plan data, date range or unit system."""
        self._rows = list(rows)
        self._start = start
        self._end = end
        if display_system is not None:
            self.display_system = display_system
        return self._recompute()

    def _recompute(self) -> GroceryList:
        with LoggingContext(view=self.view.name):
            self.grocery_list = build_range_list(
                self._rows,
                self._start,
                self._end,
                self.display_system,
                self._manual_items.load(),
                self.view,
            )
            self._sync_struck(self._struck_items.read())
        return self.grocery_list

    def _sync_struck(self, global_struck: set[str]) -> None:
        # Keys off this list stay in the global set, just not locally
        self.struck = global_struck & self.grocery_list.unique_keys()

    def _on_storage_change(self, event: StorageEvent) -> None:
        if event.key == self._struck_items.key:
            self._sync_struck(self._struck_items.decode(event.new_value))
        elif event.key == self._manual_items.key:
            self._recompute()

    def toggle(self, unique_key: str) -> None:
        """Strike or unstrike an item; every open view sees the change."""
        self._struck_items.toggle(unique_key)

    def add_manual_item(self, name: str, quantity: str = "", unit: str = "") -> None:
        """Add an ad hoc item to the shared manual list."""
        self._manual_items.add(name, quantity, unit)

    def is_struck(self, unique_key: str) -> bool:
        return unique_key in self.struck

    def close(self) -> None:
        """Stop listening for storage changes."""
        self._unsubscribe()


def open_week_view(
    struck_items: StruckItemStore,
    manual_items: ManualItemStore,
    rows: list[MealPlanRow],
    week_of: date,
    display_system: DisplaySystem | None = None,
) -> GroceryListView:
    """Open the full grocery list for the week containing week_of."""
    start, end = week_range(week_of)
    view = GroceryListView(struck_items, manual_items, FULL_VIEW)
    view.refresh(rows, start, end, display_system)
    return view


def open_today_view(
    struck_items: StruckItemStore,
    manual_items: ManualItemStore,
    rows: list[MealPlanRow],
    today: date | None = None,
    display_system: DisplaySystem | None = None,
) -> GroceryListView:
    """Open the grocery list for a single day."""
    day = today or date.today()
    view = GroceryListView(struck_items, manual_items, TODAY_VIEW)
    view.refresh(rows, day, day, display_system)
    return view
