"""
Catalog session — the single dispatch point between the UI and the core.

The UI turns every widget event into one of the intent dataclasses below
and hands it to CatalogSession.dispatch().  The session owns the product
store, the current view parameters, the form state and the pending delete,
and re-derives the visible page whenever the store or the parameters change.

Intents:
    SortBy, SetSearchText, SetCategory, SetPage, SetPageSize, ClearFilters,
    RequestCreate, RequestEdit, EditField, SubmitForm, CancelForm,
    RequestDelete, ConfirmDelete, CancelDelete
"""

import logging
from dataclasses import dataclass, field, replace

from analysis.view_pipeline import ViewParams, ViewResult, derive_view, next_sort_params
from catalog.models import Product
from catalog.product_store import ProductStore
from processing.form_validator import FormMode, validate_product

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Intents
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SortBy:
    field: str


@dataclass(frozen=True)
class SetSearchText:
    text: str


@dataclass(frozen=True)
class SetCategory:
    cat_id: str = ""


@dataclass(frozen=True)
class SetPage:
    page: int


@dataclass(frozen=True)
class SetPageSize:
    page_size: int


@dataclass(frozen=True)
class ClearFilters:
    pass


@dataclass(frozen=True)
class RequestCreate:
    pass


@dataclass(frozen=True)
class RequestEdit:
    product_id: str


@dataclass(frozen=True)
class EditField:
    name: str
    value: str


@dataclass(frozen=True)
class SubmitForm:
    """Submit the open form; *fields* overrides the draft when given."""

    fields: dict | None = None


@dataclass(frozen=True)
class CancelForm:
    pass


@dataclass(frozen=True)
class RequestDelete:
    product_id: str


@dataclass(frozen=True)
class ConfirmDelete:
    pass


@dataclass(frozen=True)
class CancelDelete:
    pass


# ═══════════════════════════════════════════════════════════════════════════
# Form state
# ═══════════════════════════════════════════════════════════════════════════

def _blank_fields() -> dict[str, str]:
    return {
        "item": "",
        "price": "",
        "catId": "",
        "uom": "",
        "productSize": "",
        "plu_upc": "",
    }


@dataclass
class FormState:
    """The add / edit form while it is open."""

    mode: FormMode = "create"
    product_id: str = ""
    fields: dict[str, str] = field(default_factory=_blank_fields)
    errors: dict[str, str] = field(default_factory=dict)

    def edits_from(self, submitted: dict[str, str]) -> list[EditField]:
        """EditField intents for the submitted values that differ from the draft."""
        return [
            EditField(name, value)
            for name, value in submitted.items()
            if self.fields.get(name, "") != value
        ]


# ═══════════════════════════════════════════════════════════════════════════
# Session
# ═══════════════════════════════════════════════════════════════════════════

class CatalogSession:
    """
    One user's catalog UI state.

    Attributes:
        store: The product store (observed by this session).
        params: Current ViewParams.
        view: ViewResult for the current store snapshot and params.
        form: Open FormState, or None when the form is closed.
        pending_delete: Product id awaiting confirmation, or None.
        change_count: Number of store changes seen; handy as a widget key.
        last_saved: Product stored by the latest submit, or None if it stored nothing.
    """

    def __init__(self, store: ProductStore, params: ViewParams | None = None) -> None:
        self.store = store
        self.params = params or ViewParams()
        self.form: FormState | None = None
        self.pending_delete: str | None = None
        self.change_count: int = 0
        self.last_saved: Product | None = None
        self.view: ViewResult = derive_view(self.store.list(), self.params)
        self.store.set_observer(self._on_store_change)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, intent: object) -> None:
        """Apply one intent.  Unknown intent types raise TypeError."""
        handler = self._handlers().get(type(intent))
        if handler is None:
            raise TypeError(f"Unknown intent: {intent!r}")
        logger.debug(f"Dispatching {intent!r}")
        handler(intent)

    def _handlers(self) -> dict:
        return {
            SortBy: self._sort_by,
            SetSearchText: self._set_search_text,
            SetCategory: self._set_category,
            SetPage: self._set_page,
            SetPageSize: self._set_page_size,
            ClearFilters: self._clear_filters,
            RequestCreate: self._request_create,
            RequestEdit: self._request_edit,
            EditField: self._edit_field,
            SubmitForm: self._submit_form,
            CancelForm: self._cancel_form,
            RequestDelete: self._request_delete,
            ConfirmDelete: self._confirm_delete,
            CancelDelete: self._cancel_delete,
        }

    # ------------------------------------------------------------------
    # View parameter intents
    # ------------------------------------------------------------------

    def _sort_by(self, intent: SortBy) -> None:
        self._set_params(next_sort_params(self.params, intent.field))

    def _set_search_text(self, intent: SetSearchText) -> None:
        self._set_params(replace(self.params, search_text=intent.text, page=0))

    def _set_category(self, intent: SetCategory) -> None:
        self._set_params(replace(self.params, category=intent.cat_id, page=0))

    def _set_page(self, intent: SetPage) -> None:
        self._set_params(replace(self.params, page=intent.page))

    def _set_page_size(self, intent: SetPageSize) -> None:
        self._set_params(replace(self.params, page_size=intent.page_size, page=0))

    def _clear_filters(self, intent: ClearFilters) -> None:
        self._set_params(replace(self.params, search_text="", category="", page=0))

    # ------------------------------------------------------------------
    # Form intents
    # ------------------------------------------------------------------

    def _request_create(self, intent: RequestCreate) -> None:
        self.form = FormState(mode="create")

    def _request_edit(self, intent: RequestEdit) -> None:
        product = self.store.get(intent.product_id)
        if product is None:
            logger.info(f"Edit requested for unknown product '{intent.product_id}'")
            return

        raw = product.to_raw()
        raw.pop("productId")
        self.form = FormState(mode="edit", product_id=product.product_id, fields=raw)

    def _edit_field(self, intent: EditField) -> None:
        if self.form is None:
            return
        self.form.fields[intent.name] = intent.value
        self.form.errors.pop(intent.name, None)

    def _submit_form(self, intent: SubmitForm) -> None:
        if self.form is None:
            return
        self.last_saved = None

        if intent.fields is not None:
            self.form.fields = {**self.form.fields, **intent.fields}

        result = validate_product(
            self.form.fields, mode=self.form.mode, product_id=self.form.product_id
        )
        if not result.is_valid:
            self.form.errors = result.errors
            return

        if self.form.mode == "create":
            self.last_saved = self.store.create(result.product)
        elif self.store.update(result.product):
            self.last_saved = result.product
        else:
            logger.info(f"Product {result.product.product_id} was removed before the edit was saved")
        self.form = None

    def _cancel_form(self, intent: CancelForm) -> None:
        self.form = None

    # ------------------------------------------------------------------
    # Delete intents
    # ------------------------------------------------------------------

    def _request_delete(self, intent: RequestDelete) -> None:
        self.pending_delete = intent.product_id

    def _confirm_delete(self, intent: ConfirmDelete) -> None:
        if self.pending_delete is None:
            return
        product_id, self.pending_delete = self.pending_delete, None
        self.store.delete(product_id)

    def _cancel_delete(self, intent: CancelDelete) -> None:
        self.pending_delete = None

    # ------------------------------------------------------------------
    # Recompute
    # ------------------------------------------------------------------

    def _set_params(self, params: ViewParams) -> None:
        self.params = params
        self.view = derive_view(self.store.list(), self.params)

    def _on_store_change(self, products: tuple[Product, ...]) -> None:
        self.change_count += 1
        self.view = derive_view(products, self.params)
