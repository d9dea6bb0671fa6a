"""Supabase repository for published weekly menus."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from nutriplan.adapters.supabase_errors import execute
from nutriplan.domain.menus import MenuItem, SchoolDay, WeeklyMenu
from nutriplan.services.choices import MenuRepository


@dataclass
class SupabaseMenuRepository(MenuRepository):
    """Read weekly menus and their items."""

    client: Client

    def find_upcoming_active_menu(self, after: datetime) -> WeeklyMenu | None:
        """Return the earliest active menu starting strictly after `after`."""
        response = execute(
            self.client.table("weekly_menus")
            .select("*, menu_items(*)")
            .gt("week_start", after.isoformat())
            .eq("is_active", True)
            .order("week_start")
            .limit(1),
            "find upcoming menu",
        )
        if not response.data:
            return None
        return _parse_menu(response.data[0])


def _parse_menu(row: dict[str, object]) -> WeeklyMenu:
    items = tuple(
        MenuItem(
            id=str(item["id"]),
            day=SchoolDay(str(item["day"])),
            menu_name=str(item.get("menu_name") or ""),
            ingredients=tuple(item.get("ingredients") or ()),
            allergens=tuple(item.get("allergens") or ()),
        )
        for item in row.get("menu_items") or []
    )
    return WeeklyMenu(
        id=str(row["id"]),
        week_start=datetime.fromisoformat(str(row["week_start"])),
        week_end=datetime.fromisoformat(str(row["week_end"])),
        is_active=bool(row.get("is_active", False)),
        items=items,
    )
