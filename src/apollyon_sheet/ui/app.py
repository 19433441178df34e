"""Apollyon Character Sheet - Streamlit page.

Renders the whole sheet from the editor held in ``st.session_state`` and
routes every widget change back through ``CharacterSheetEditor``. Widget
keys carry a generation number; structural changes (rows added or
removed, category switches, import, reset) bump it so every widget is
rebuilt from the sheet instead of from stale widget state.

Run with:
    streamlit run src/apollyon_sheet/ui/app.py
"""

from __future__ import annotations

from decimal import Decimal

import streamlit as st

from apollyon_sheet.core.config import get_settings
from apollyon_sheet.core.exceptions import ApollyonSheetError, SheetImportError, UIError
from apollyon_sheet.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    get_logger,
)
from apollyon_sheet.engine.derived import has_computed_base
from apollyon_sheet.engine.editor import CharacterSheetEditor
from apollyon_sheet.models.enums import (
    CollectionKind,
    CoreField,
    DerivedField,
    IdentityField,
)
from apollyon_sheet.ui.theme import (
    apply_theme,
    render_ability_text,
    render_derived_end,
    render_mote_header,
    render_section_title,
)


logger = get_logger(__name__)

settings = get_settings()


# =============================================================================
# Page Configuration
# =============================================================================


st.set_page_config(
    page_title=settings.ui.page_title,
    page_icon="📜",
    layout=settings.ui.layout,
    initial_sidebar_state="expanded",
)

apply_theme()


# =============================================================================
# Session State
# =============================================================================


COLLECTION_LAYOUT: dict[CollectionKind, tuple[str, tuple[tuple[str, str], ...]]] = {
    CollectionKind.INVENTORY: ("Inventory", (("name", "Name"), ("description", "Description"))),
    CollectionKind.ENHANCEMENTS: (
        "Known Enhancements",
        (("name", "Name"), ("cost", "Cost"), ("item", "Item"), ("effect", "Effect")),
    ),
    CollectionKind.MASTERIES: ("Masteries", (("name", "Name"), ("effect", "Effect"))),
    CollectionKind.MIND_ALTERATIONS: (
        "Mind Alterations",
        (("name", "Name"), ("description", "Description")),
    ),
    CollectionKind.MIND_BREAKS: ("Mind Breaks", (("name", "Name"), ("description", "Description"))),
}
"""Title and (field, label) columns for each collection panel."""


def init_session_state() -> None:
    """Initialize session state for the sheet page."""
    if "sheet_editor" not in st.session_state:
        configure_from_settings(settings)
        st.session_state.sheet_editor = CharacterSheetEditor.from_settings(settings)

    if "sheet_generation" not in st.session_state:
        st.session_state.sheet_generation = 0

    if "sheet_notice" not in st.session_state:
        st.session_state.sheet_notice = None


def get_editor() -> CharacterSheetEditor:
    """Get the sheet editor for this session."""
    init_session_state()
    editor = st.session_state.sheet_editor
    if not isinstance(editor, CharacterSheetEditor):
        raise UIError(
            "Session holds an unexpected sheet editor",
            details={"type": type(editor).__name__},
        )
    return editor


def widget_key(*parts: object) -> str:
    """Build a widget key scoped to the current generation."""
    return ":".join(str(part) for part in (st.session_state.sheet_generation, *parts))


def refresh(notice: tuple[str, str] | None = None) -> None:
    """Rebuild every widget from the sheet on the next run."""
    st.session_state.sheet_generation += 1
    if notice is not None:
        st.session_state.sheet_notice = notice
    st.rerun()


def render_notice() -> None:
    """Show and clear the pending notice, if any."""
    notice = st.session_state.sheet_notice
    if not notice:
        return
    level, message = notice
    if level == "success":
        st.success(message)
    elif level == "warning":
        st.warning(message)
    else:
        st.error(message)
    st.session_state.sheet_notice = None


# =============================================================================
# Identity
# =============================================================================


def render_identity(editor: CharacterSheetEditor) -> None:
    """Render name, level, experience and race."""
    state = editor.state
    columns = st.columns([3, 1, 1, 2])
    labels = {
        IdentityField.NAME: "Name",
        IdentityField.LEVEL: "Level",
        IdentityField.EXPERIENCE: "Experience",
        IdentityField.RACE: "Race",
    }
    for column, (field_name, label) in zip(columns, labels.items()):
        with column:
            current = getattr(state, field_name.value)
            value = st.text_input(label, value=current, key=widget_key("identity", field_name))
            if value != current:
                editor.set_identity(field_name, value)


# =============================================================================
# Attributes
# =============================================================================


def render_core_table(editor: CharacterSheetEditor) -> None:
    """Render the core attribute table."""
    render_section_title("Core Attributes")
    header = st.columns([2, 1, 1, 1, 1, 1])
    for column, label in zip(header, ["", "Base", "Mod", "Temp", "Level", "Total"]):
        column.caption(label)

    for attr in editor.state.core:
        columns = st.columns([2, 1, 1, 1, 1, 1])
        columns[0].markdown(f"**{attr.name.value}**")
        for column, field_name in zip(columns[1:5], CoreField):
            current = getattr(attr, field_name.value)
            value = column.number_input(
                f"{attr.name.value} {field_name.value}",
                value=current,
                step=1,
                label_visibility="collapsed",
                key=widget_key("core", attr.name, field_name),
            )
            if value != current:
                editor.set_core(attr.name, field_name, int(value))
        with columns[5]:
            render_derived_end(attr.total)


def _multiplier_input(editor: CharacterSheetEditor, column, attr) -> None:
    sheet_settings = settings.sheet
    current = float(attr.multiplier)
    value = column.number_input(
        f"{attr.name.value} multiplier",
        value=current,
        min_value=min(float(sheet_settings.multiplier_min), current),
        max_value=max(float(sheet_settings.multiplier_max), current),
        step=float(sheet_settings.multiplier_step),
        format="%.2f",
        label_visibility="collapsed",
        key=widget_key("derived", attr.name, DerivedField.MULTIPLIER),
    )
    if Decimal(str(value)) != attr.multiplier:
        editor.set_derived(attr.name, DerivedField.MULTIPLIER, Decimal(str(value)))


def render_derived_table(editor: CharacterSheetEditor) -> None:
    """Render the derived attribute table."""
    render_section_title("Derived Attributes")
    widths = [2, 1, 1, 1, 1, 1, 1]
    header = st.columns(widths)
    for column, label in zip(header, ["", "Base", "Mod", "Temp", "Mult", "End", "Current"]):
        column.caption(label)

    for attr in editor.state.derived:
        columns = st.columns(widths)
        columns[0].markdown(f"**{attr.name.value}**")

        for column, field_name in zip(
            columns[1:4],
            (DerivedField.BASE, DerivedField.MODIFIER, DerivedField.TEMPORARY),
        ):
            current = getattr(attr, field_name.value)
            computed = field_name is DerivedField.BASE and has_computed_base(attr.name)
            key_parts = ["derived", attr.name, field_name]
            if computed:
                # keyed by value so the read-only box follows the core table
                key_parts.append(current)
            value = column.number_input(
                f"{attr.name.value} {field_name.value}",
                value=current,
                step=1,
                disabled=computed,
                label_visibility="collapsed",
                key=widget_key(*key_parts),
            )
            if not computed and value != current:
                editor.set_derived(attr.name, field_name, int(value))

        _multiplier_input(editor, columns[4], attr)

        with columns[5]:
            render_derived_end(attr.end)

        if attr.has_extra:
            value = columns[6].number_input(
                f"{attr.name.value} current",
                value=attr.extra,
                step=1,
                placeholder=attr.extra_placeholder,
                label_visibility="collapsed",
                key=widget_key("derived", attr.name, DerivedField.EXTRA),
            )
            if value != attr.extra:
                editor.set_derived(
                    attr.name,
                    DerivedField.EXTRA,
                    None if value is None else int(value),
                )


# =============================================================================
# Motes
# =============================================================================


def render_mote_slot(editor: CharacterSheetEditor, slot_index: int) -> None:
    """Render one mote column: category, ability rows and row controls."""
    selector = editor.selector(slot_index)
    conflicts = editor.conflicts
    category = selector.category

    render_mote_header(category, slot_index)

    categories = list(editor.catalog.categories_sorted())
    chosen = st.selectbox(
        "Mote",
        categories,
        index=categories.index(category) if category in categories else 0,
        format_func=lambda name: (
            "-- none --"
            if not name
            else f"{name} (taken)"
            if conflicts.is_category_disabled(slot_index, name)
            else name
        ),
        key=widget_key("mote", slot_index, "category"),
    )
    if chosen != category:
        if editor.set_category(slot_index, chosen):
            refresh()
        else:
            refresh(("warning", f"{chosen} is already chosen in another mote slot."))

    option_names = [record.name for record in selector.options]
    for row_index, row in enumerate(selector.slot.abilities):
        picked = st.selectbox(
            f"Ability {row_index + 1}",
            option_names,
            index=option_names.index(row.ability) if row.ability in option_names else None,
            format_func=lambda name, r=row_index: (
                "-- none --"
                if not name
                else f"{name} (taken)"
                if conflicts.is_ability_disabled(slot_index, r, name)
                else name
            ),
            key=widget_key("mote", slot_index, category, row_index, "ability"),
        )
        if picked is not None and picked != row.ability:
            if editor.select_ability(slot_index, row_index, picked):
                refresh()
            else:
                refresh(("warning", f"{picked} is already chosen in this mote."))

        info_col, delete_col = st.columns([1, 1])
        if info_col.button(
            "Less" if row.show_details else "Info",
            key=widget_key("mote", slot_index, row_index, "info"),
            use_container_width=True,
        ):
            editor.toggle_description_detail(slot_index, row_index)
            refresh()
        if selector.can_remove_rows and delete_col.button(
            "Remove",
            key=widget_key("mote", slot_index, row_index, "remove"),
            use_container_width=True,
        ):
            editor.remove_ability_row(slot_index, row_index)
            refresh()

        render_ability_text(category, selector.display_text(row_index))

    if st.button(
        "Add ability",
        key=widget_key("mote", slot_index, "add"),
        use_container_width=True,
    ):
        editor.add_ability_row(slot_index)
        refresh()


def render_motes(editor: CharacterSheetEditor) -> None:
    """Render every mote column side by side."""
    render_section_title("Motes")
    if editor.conflicts.has_duplicates:
        st.warning("This sheet holds duplicate mote or ability selections.")
    for slot_index, column in enumerate(st.columns(editor.slot_count)):
        with column:
            render_mote_slot(editor, slot_index)


# =============================================================================
# Collections
# =============================================================================


def render_collection(editor: CharacterSheetEditor, kind: CollectionKind) -> None:
    """Render one variable-length list with add and delete controls."""
    title, fields = COLLECTION_LAYOUT[kind]
    collection = editor.collection(kind)
    render_section_title(title)

    for index, item in enumerate(collection.items):
        columns = st.columns([*([3] * len(fields)), 1])
        for column, (field_name, label) in zip(columns, fields):
            current = getattr(item, field_name)
            if field_name in ("description", "effect"):
                value = column.text_area(
                    label,
                    value=current,
                    height=68,
                    label_visibility="collapsed",
                    placeholder=label,
                    key=widget_key(kind, index, field_name),
                )
            else:
                value = column.text_input(
                    label,
                    value=current,
                    label_visibility="collapsed",
                    placeholder=label,
                    key=widget_key(kind, index, field_name),
                )
            if value != current:
                editor.set_item_field(kind, index, field_name, value)
        if collection.can_remove and columns[-1].button("✕", key=widget_key(kind, index, "remove")):
            editor.remove_item(kind, index)
            refresh()

    if st.button(f"Add to {title}", key=widget_key(kind, "add")):
        editor.add_item(kind)
        refresh()


def render_collections(editor: CharacterSheetEditor) -> None:
    """Render the five collections and the mastery value."""
    left, right = st.columns(2)
    with left:
        render_collection(editor, CollectionKind.INVENTORY)
        render_collection(editor, CollectionKind.ENHANCEMENTS)
    with right:
        render_collection(editor, CollectionKind.MASTERIES)
        current = editor.state.mastery_value
        value = st.text_input(
            "Mastery value",
            value=current,
            key=widget_key("mastery_value"),
        )
        if value != current:
            editor.set_mastery_value(value)
        render_collection(editor, CollectionKind.MIND_ALTERATIONS)
        render_collection(editor, CollectionKind.MIND_BREAKS)


# =============================================================================
# Export / Import
# =============================================================================


def render_transfer_panels(editor: CharacterSheetEditor) -> None:
    """Render the export and import panels."""
    with st.expander("Export character"):
        text = editor.export_text()
        st.code(text, language="json")
        file_stem = editor.state.name.strip().replace(" ", "_") or "character"
        st.download_button(
            "Download JSON",
            data=text,
            file_name=f"{file_stem}.json",
            mime="application/json",
        )

    with st.expander("Import character"):
        pasted = st.text_area("Character JSON", key=widget_key("import_text"), height=160)
        uploaded = st.file_uploader("...or upload a file", type=["json"], key=widget_key("import_file"))
        if st.button("Import", type="primary", key=widget_key("import_button")):
            payload = uploaded.getvalue() if uploaded is not None else pasted
            try:
                conflicts = editor.import_text(payload)
            except SheetImportError as exc:
                st.error(f"Import failed: {exc.message}")
            else:
                if conflicts.has_duplicates:
                    notice = ("warning", "Character imported with duplicate mote selections.")
                else:
                    notice = ("success", "Character imported.")
                refresh(notice)


# =============================================================================
# Sidebar
# =============================================================================


def render_sidebar(editor: CharacterSheetEditor) -> None:
    """Render the sidebar actions."""
    with st.sidebar:
        st.markdown(f"# 📜 {settings.app_name}")
        st.caption(f"v{settings.app_version}")
        st.divider()

        if st.button("Clear sheet", use_container_width=True):
            editor.reset()
            refresh(("success", "Sheet cleared."))

        st.divider()
        st.caption(f"{len(editor.catalog)} abilities across {len(editor.catalog.categories_sorted()) - 1} motes")


# =============================================================================
# Main Page
# =============================================================================


def main() -> None:
    """Render the character sheet page."""
    try:
        editor = get_editor()
    except ApollyonSheetError as exc:
        logger.exception("Sheet editor unavailable")
        st.error(f"Cannot start the character sheet: {exc.message}")
        return

    clear_context()
    bind_context(sheet=editor.state.name or "unnamed")

    render_sidebar(editor)

    st.title(editor.state.name or "Unnamed Character")
    render_notice()

    render_identity(editor)
    st.divider()

    core_col, derived_col = st.columns([5, 7])
    with core_col:
        render_core_table(editor)
    with derived_col:
        render_derived_table(editor)
    st.divider()

    render_motes(editor)
    st.divider()

    render_collections(editor)
    st.divider()

    render_transfer_panels(editor)


# =============================================================================
# Entry Point
# =============================================================================


main()
