from collections.abc import Collection
from typing import Any

import flet as ft

from src.adapters.product_source import SourceFetchError
from src.components.catalog_view import (
    PaginationMeta,
    RecordSourcePort,
    TableViewEngine,
    ViewOutput,
)
from src.ui.state import AppState

ALL_CATEGORIES = ""
IMAGE_SIZE = 50


def page_label(meta: PaginationMeta) -> str:
    return f"Page {meta.page_index + 1} of {meta.page_count}"


def cell_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def category_options(categories: Collection[str]) -> list[ft.dropdown.Option]:
    options = [ft.dropdown.Option(key=ALL_CATEGORIES, text="All Categories")]
    options.extend(ft.dropdown.Option(key=c, text=c) for c in categories)
    return options


class ProductTableView(ft.Column): # type: ignore
    """
    Renders the catalog engine's view: search box, category picker,
    the projected rows and the pager.
    """

    def __init__(
        self,
        engine: TableViewEngine,
        source: RecordSourcePort,
        app_state: AppState,
        collection_field: str = "products",
        image_columns: Collection[str] = ("images", "thumbnail"),
    ) -> None:
        super().__init__(expand=True, scroll=ft.ScrollMode.AUTO)
        self.engine = engine
        self.source = source
        self.app_state = app_state
        self.collection_field = collection_field
        self.image_columns = frozenset(image_columns)

        self.search = ft.TextField(
            hint_text="Search all columns...",
            width=300,
            on_change=self.search_changed,
        )
        self.category = ft.Dropdown(
            width=250,
            value=ALL_CATEGORIES,
            options=category_options(()),
            on_change=self.category_changed,
        )
        self.table = ft.DataTable(columns=[ft.DataColumn(ft.Text(""))], rows=[])
        self.status = ft.Text()
        self.error_text = ft.Text(color="red", visible=False)
        self.first_btn = ft.ElevatedButton("<<", on_click=self.first_click)
        self.prev_btn = ft.ElevatedButton("<", on_click=self.prev_click)
        self.next_btn = ft.ElevatedButton(">", on_click=self.next_click)
        self.last_btn = ft.ElevatedButton(">>", on_click=self.last_click)
        self.refresh_btn = ft.ElevatedButton("Refresh", on_click=self.refresh_click)
        self.spinner = ft.ProgressRing(visible=False)

        self.controls = [
            ft.Row([self.search, self.category, self.refresh_btn]),
            self.spinner,
            self.error_text,
            ft.Row([self.table], scroll=ft.ScrollMode.AUTO),
            ft.Row(
                [
                    ft.Row([self.first_btn, self.prev_btn, self.next_btn, self.last_btn]),
                    self.status,
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
        ]

    # --- Data ---

    def load(self) -> None:
        """Fetch a fresh snapshot; on failure the engine shows no records."""
        self.app_state.start_loading()
        self.engine.set_source(None)
        try:
            payload = self.source.fetch_snapshot()
        except SourceFetchError as e:
            self.app_state.finish_loading(str(e))
        else:
            self.engine.load_snapshot(payload, self.collection_field)
            self.app_state.finish_loading()
        self.render(self.engine.view())

    def reload(self) -> None:
        """Refetch while mounted, showing the loading state first."""
        self.app_state.start_loading()
        self.engine.set_source(None)
        self._refresh()
        self.load()
        self.update()

    # --- RendererPort ---

    def render(self, view: ViewOutput) -> None:
        self.spinner.visible = self.app_state.is_loading
        self.error_text.visible = self.app_state.load_error is not None
        error = self.app_state.load_error
        self.error_text.value = f"Error loading products: {error}" if error else ""

        self.category.options = category_options(view.categories)
        self.table.columns = [ft.DataColumn(ft.Text(header)) for header in view.headers]
        self.table.rows = [
            ft.DataRow(cells=[ft.DataCell(self._cell(key, row[key])) for key in view.keys])
            for row in view.rows
        ]

        meta = view.pagination
        self.status.value = page_label(meta)
        self.first_btn.disabled = not meta.can_go_previous
        self.prev_btn.disabled = not meta.can_go_previous
        self.next_btn.disabled = not meta.can_go_next
        self.last_btn.disabled = not meta.can_go_next

    def _cell(self, key: str, value: Any) -> ft.Control:
        if key in self.image_columns:
            refs = value if isinstance(value, (list, tuple)) else (value,)
            return ft.Row(
                [ft.Image(src=ref, width=IMAGE_SIZE, height=IMAGE_SIZE) for ref in refs if ref]
            )
        return ft.Text(cell_text(value))

    def _refresh(self) -> None:
        self.render(self.engine.view())
        self.update()

    # --- Events ---

    def search_changed(self, e: ft.ControlEvent) -> None:
        self.engine.set_global_filter(self.search.value)
        self._refresh()

    def category_changed(self, e: ft.ControlEvent) -> None:
        self.engine.set_categorical_filter(self.category.value)
        self._refresh()

    def first_click(self, e: ft.ControlEvent) -> None:
        self.engine.first_page()
        self._refresh()

    def prev_click(self, e: ft.ControlEvent) -> None:
        self.engine.previous_page()
        self._refresh()

    def next_click(self, e: ft.ControlEvent) -> None:
        self.engine.next_page()
        self._refresh()

    def last_click(self, e: ft.ControlEvent) -> None:
        self.engine.last_page()
        self._refresh()

    def refresh_click(self, e: ft.ControlEvent) -> None:
        self.reload()
