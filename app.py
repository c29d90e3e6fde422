"""
Streamlit entry point — Product Catalog Manager UI.

One page:
  1. Sidebar: catalog source (bundled file or upload), ingestion notes,
     Excel download.
  2. Header with the Add Product button.
  3. Search box, category filter, "Showing X of Y" summary.
  4. Sortable product table with edit / delete actions.
  5. Pager (rows per page, previous / next).
  6. Add / edit form and the delete confirmation.

Contains NO business logic — every widget event becomes an intent passed to
CatalogSession.dispatch(); the table shows session.view.
"""

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

import streamlit as st

from analysis.view_pipeline import view_to_dataframe
from catalog.ingestion import load_catalog
from catalog.session import (
    CancelDelete,
    CancelForm,
    CatalogSession,
    ClearFilters,
    ConfirmDelete,
    RequestCreate,
    RequestDelete,
    RequestEdit,
    SetCategory,
    SetPage,
    SetPageSize,
    SetSearchText,
    SortBy,
    SubmitForm,
)
from config.catalog_config import (
    DEFAULT_PRODUCTS_PATH,
    PAGE_SIZE_OPTIONS,
    PRODUCTS_FILE_SETTING,
)
from config.schema import (
    DISPLAY_LABELS,
    FORM_LABELS,
    FORM_PLACEHOLDERS,
    REQUIRED_FIELD_MESSAGES,
    SORTABLE_FIELDS,
)
from utils.excel_formatter import export_catalog

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Page configuration
# ═══════════════════════════════════════════════════════════════════════════

st.set_page_config(
    page_title="Product Management",
    page_icon="🍖",
    layout="wide",
)


# ═══════════════════════════════════════════════════════════════════════════
# Catalog loading
# ═══════════════════════════════════════════════════════════════════════════

def _configured_products_path() -> Path:
    """PRODUCTS_FILE from secrets, then the environment, then the sample."""
    try:
        configured = st.secrets.get(PRODUCTS_FILE_SETTING)
    except FileNotFoundError:
        configured = None
    configured = configured or os.environ.get(PRODUCTS_FILE_SETTING)
    return Path(configured) if configured else DEFAULT_PRODUCTS_PATH


def _start_session(products_path: Path) -> None:
    """Ingest a catalog file and replace the session built on the old one."""
    ingestion = load_catalog(products_path)
    st.session_state["catalog_session"] = CatalogSession(ingestion.store)
    st.session_state["ingestion_duplicates"] = ingestion.duplicates
    st.session_state["ingestion_errors"] = ingestion.errors
    st.session_state["catalog_source"] = ingestion.source
    st.session_state["form_generation"] = 0
    st.session_state["search_text"] = ""
    st.session_state["category"] = ""
    st.session_state.pop("page_size", None)


if "catalog_session" not in st.session_state:
    _start_session(_configured_products_path())

session: CatalogSession = st.session_state["catalog_session"]


# ═══════════════════════════════════════════════════════════════════════════
# Widget callbacks
# ═══════════════════════════════════════════════════════════════════════════

def _dispatch(intent: object) -> None:
    st.session_state["catalog_session"].dispatch(intent)


def _on_search_change() -> None:
    _dispatch(SetSearchText(st.session_state["search_text"]))


def _on_category_change() -> None:
    _dispatch(SetCategory(st.session_state["category"] or ""))


def _on_page_size_change() -> None:
    _dispatch(SetPageSize(int(st.session_state["page_size"])))


def _on_clear_filters() -> None:
    st.session_state["search_text"] = ""
    st.session_state["category"] = ""
    _dispatch(ClearFilters())


def _open_form(intent: RequestCreate | RequestEdit) -> None:
    # New widget keys so the inputs pick up the fresh draft values.
    st.session_state["form_generation"] += 1
    _dispatch(intent)


# ═══════════════════════════════════════════════════════════════════════════
# Sidebar — Catalog source & export
# ═══════════════════════════════════════════════════════════════════════════

st.sidebar.title("📦 Catalog")
st.sidebar.caption(f"Loaded from **{st.session_state['catalog_source']}**")

uploaded_catalog = st.sidebar.file_uploader(
    "Load a different catalog",
    type=["json", "csv", "xlsx"],
    help="Replaces the products in this session. Nothing is saved to disk.",
)
if uploaded_catalog is not None and st.sidebar.button("Load Catalog", use_container_width=True):
    with tempfile.TemporaryDirectory() as temp_dir:
        upload_path = Path(temp_dir) / uploaded_catalog.name
        upload_path.write_bytes(uploaded_catalog.getvalue())
        _start_session(upload_path)
    st.rerun()

ingestion_errors = st.session_state["ingestion_errors"]
if ingestion_errors:
    for error_msg in ingestion_errors:
        st.sidebar.error(error_msg)

ingestion_duplicates = st.session_state["ingestion_duplicates"]
if ingestion_duplicates:
    with st.sidebar.expander(f"ℹ️ Ingestion notes ({len(ingestion_duplicates)})"):
        st.caption("Later records sharing a product ID were skipped:")
        for duplicate in ingestion_duplicates:
            st.text(f'{duplicate.product_id} - "{duplicate.item}"')

st.sidebar.divider()

with tempfile.TemporaryDirectory() as download_temp_dir:
    export_path = export_catalog(
        session.store.list(), Path(download_temp_dir) / "products.xlsx"
    )
    excel_bytes = export_path.read_bytes()

st.sidebar.download_button(
    label="📥 Download Excel",
    data=excel_bytes,
    file_name=f"products_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx",
    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    use_container_width=True,
)


# ═══════════════════════════════════════════════════════════════════════════
# Header
# ═══════════════════════════════════════════════════════════════════════════

title_col, add_col = st.columns([4, 1])
title_col.title("🍖 Product Management")
add_col.button(
    "➕ Add Product",
    type="primary",
    use_container_width=True,
    on_click=_open_form,
    args=(RequestCreate(),),
)


# ═══════════════════════════════════════════════════════════════════════════
# Section 1: Add / Edit form
# ═══════════════════════════════════════════════════════════════════════════

if session.form is not None:
    form_state = session.form
    is_edit = form_state.mode == "edit"
    generation = st.session_state["form_generation"]

    with st.container(border=True):
        st.subheader("Edit Product" if is_edit else "Add New Product")

        with st.form(f"product_form_{generation}"):
            submitted_fields: dict[str, str] = {}
            for name, label in FORM_LABELS.items():
                submitted_fields[name] = st.text_input(
                    label + (" *" if name in REQUIRED_FIELD_MESSAGES else ""),
                    value=form_state.fields.get(name, ""),
                    placeholder=FORM_PLACEHOLDERS.get(name, ""),
                    key=f"form_{generation}_{name}",
                )
                if name in form_state.errors:
                    st.error(form_state.errors[name])

            submit_col, cancel_col = st.columns(2)
            submit_clicked = submit_col.form_submit_button(
                "Update" if is_edit else "Add",
                type="primary",
                use_container_width=True,
            )
            cancel_clicked = cancel_col.form_submit_button(
                "Cancel", use_container_width=True
            )

        if submit_clicked:
            for edit in form_state.edits_from(submitted_fields):
                session.dispatch(edit)
            session.dispatch(SubmitForm())
            if session.form is None and session.last_saved is not None:
                st.toast(f"Saved {session.last_saved.item} ({session.last_saved.price})")
            elif session.form is None:
                st.toast("That product was deleted; nothing was saved.")
            st.rerun()
        if cancel_clicked:
            session.dispatch(CancelForm())
            st.rerun()


# ═══════════════════════════════════════════════════════════════════════════
# Section 2: Delete confirmation
# ═══════════════════════════════════════════════════════════════════════════

if session.pending_delete is not None:
    pending_product = session.store.get(session.pending_delete)
    pending_label = pending_product.item if pending_product else session.pending_delete

    st.warning(f"Are you sure you want to delete **{pending_label}**?")
    confirm_col, keep_col, _spacer = st.columns([1, 1, 4])
    confirm_col.button(
        "🗑️ Delete",
        type="primary",
        use_container_width=True,
        on_click=_dispatch,
        args=(ConfirmDelete(),),
    )
    keep_col.button(
        "Cancel",
        use_container_width=True,
        on_click=_dispatch,
        args=(CancelDelete(),),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Section 3: Search & category filter
# ═══════════════════════════════════════════════════════════════════════════

# Keep the page in range after deletes shrink the last page.
if session.view.page_count and session.params.page >= session.view.page_count:
    session.dispatch(SetPage(session.view.page_count - 1))

view = session.view

with st.container(border=True):
    search_col, category_col, _filler = st.columns([2, 1, 2])
    search_col.text_input(
        "🔍 Search Products",
        key="search_text",
        placeholder="Search by name, ID, or price...",
        on_change=_on_search_change,
    )

    category_options = [""] + view.categories
    if st.session_state.get("category") not in category_options:
        st.session_state["category"] = ""
    category_col.selectbox(
        "Filter by Category",
        options=category_options,
        key="category",
        format_func=lambda cat_id: f"Category {cat_id}" if cat_id else "All Categories",
        on_change=_on_category_change,
    )

    summary_col, clear_col = st.columns([4, 1])
    summary = f"Showing {len(view.rows)} of {view.total_matching} products"
    if view.is_filtered:
        summary += f" (filtered from {view.total_records} total)"
    summary_col.caption(summary)

    if session.params.search_text or session.params.category:
        clear_col.button("Clear Filters", on_click=_on_clear_filters, use_container_width=True)


# ═══════════════════════════════════════════════════════════════════════════
# Section 4: Product table
# ═══════════════════════════════════════════════════════════════════════════

column_widths = [1.2, 3, 1, 1, 0.8, 0.5, 0.5]
header_cols = st.columns(column_widths)
for header_col, sort_field in zip(header_cols, SORTABLE_FIELDS):
    arrow = ""
    if session.params.sort_field == sort_field:
        arrow = " ▲" if session.params.sort_direction == "asc" else " ▼"
    header_col.button(
        f"{DISPLAY_LABELS[sort_field]}{arrow}",
        key=f"sort_{sort_field}",
        on_click=_dispatch,
        args=(SortBy(sort_field),),
        use_container_width=True,
    )
header_cols[5].markdown("**Edit**")
header_cols[6].markdown("**Delete**")

if not view.rows:
    st.info("No products match the current filters.")

table = view_to_dataframe(view.rows)
for position, product in enumerate(view.rows):
    row_cols = st.columns(column_widths)
    for row_col, label in zip(row_cols, table.columns[: len(SORTABLE_FIELDS)]):
        row_col.text(table.at[position, label])
    row_cols[5].button(
        "✏️",
        key=f"edit_{position}_{product.product_id}",
        on_click=_open_form,
        args=(RequestEdit(product.product_id),),
    )
    row_cols[6].button(
        "🗑️",
        key=f"delete_{position}_{product.product_id}",
        on_click=_dispatch,
        args=(RequestDelete(product.product_id),),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Section 5: Pager
# ═══════════════════════════════════════════════════════════════════════════

st.divider()

size_col, prev_col, page_col, next_col = st.columns([1, 1, 2, 1])

if "page_size" not in st.session_state:
    st.session_state["page_size"] = session.params.page_size
size_col.selectbox(
    "Rows per page",
    options=PAGE_SIZE_OPTIONS,
    key="page_size",
    on_change=_on_page_size_change,
)

current_page = session.params.page
last_page = max(view.page_count - 1, 0)

prev_col.button(
    "◀ Previous",
    disabled=current_page <= 0,
    on_click=_dispatch,
    args=(SetPage(current_page - 1),),
    use_container_width=True,
)
page_col.markdown(f"Page **{current_page + 1}** of **{last_page + 1}**")
next_col.button(
    "Next ▶",
    disabled=current_page >= last_page,
    on_click=_dispatch,
    args=(SetPage(current_page + 1),),
    use_container_width=True,
)
