from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List

import pandas as pd
import streamlit as st

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from citation_engine.app import CitationEngine  # noqa: E402
from citation_engine.locales import STYLE_LABELS, warning_label  # noqa: E402
from citation_engine.models import (  # noqa: E402
    CitationInput,
    CitationSourceType,
    CitationStyle,
    ParsedCitationFields,
)
from citation_engine.names import parse_authors  # noqa: E402

LOCALE_OPTIONS = {"English": "en", "中文": "zh"}

SOURCE_TYPE_LABELS = {
    CitationSourceType.WEBSITE: "Website",
    CitationSourceType.JOURNAL: "Journal article",
    CitationSourceType.BOOK: "Book",
}

FORM_FIELDS = {
    "authors_raw": "Authors (one per line, 'Family, Given')",
    "title": "Title",
    "container_title": "Journal / website",
    "publisher": "Publisher",
    "published_date": "Published (YYYY-MM-DD)",
    "access_date": "Accessed (YYYY-MM-DD)",
    "volume": "Volume",
    "issue": "Issue",
    "pages": "Pages",
    "url": "URL",
    "doi": "DOI",
}


def _init_state() -> None:
    st.session_state.setdefault("style", CitationStyle.APA7)
    st.session_state.setdefault("source_type", CitationSourceType.WEBSITE)
    for key in FORM_FIELDS:
        st.session_state.setdefault(key, "")


def _apply_parsed(fields: ParsedCitationFields) -> None:
    """Copy extracted fields into the form, keeping values the parser could not find."""
    if isinstance(fields.style, CitationStyle):
        st.session_state["style"] = fields.style
    if fields.source_type:
        st.session_state["source_type"] = fields.source_type
    for key in FORM_FIELDS:
        value = getattr(fields, key)
        if value:
            st.session_state[key] = value


def _entry_from_state() -> CitationInput:
    state = st.session_state
    return CitationInput(
        style=state["style"],
        source_type=state["source_type"],
        authors=parse_authors(state["authors_raw"]),
        **{key: state[key] for key in FORM_FIELDS if key != "authors_raw"},
    )


def _build_rows(engine: CitationEngine, text: str) -> List[Dict[str, object]]:
    rows = []
    for fields in engine.parse_many(text.splitlines()):
        row = {"Style": STYLE_LABELS.get(fields.style, fields.style), "Confidence": round(fields.confidence, 2)}
        row.update({label: (getattr(fields, key) or "").replace("\n", "; ") for key, label in FORM_FIELDS.items()})
        rows.append(row)
    return rows


def main() -> None:
    st.set_page_config(page_title="Citation Engine", layout="wide")
    st.title("Citation Engine")
    st.caption("Paste a citation to detect its style and fill the form, or enter fields to render a citation.")
    _init_state()

    locale = LOCALE_OPTIONS[st.selectbox("Language", list(LOCALE_OPTIONS.keys()), index=0)]
    engine = CitationEngine(locale=locale)

    raw = st.text_area("Citation to parse", placeholder="Paste one citation...", height=100)
    if st.button("Detect and apply"):
        if not raw.strip():
            st.warning("Paste a citation first.")
        else:
            fields = engine.parse(raw)
            if fields.style == "unknown":
                st.info(f"Style not recognised (confidence {fields.confidence:.2f}); applied what was found.")
            else:
                st.success(f"Detected {STYLE_LABELS[fields.style]} (confidence {fields.confidence:.2f}).")
            _apply_parsed(fields)

    left, right = st.columns(2)
    with left:
        st.selectbox("Style", list(CitationStyle), format_func=STYLE_LABELS.get, key="style")
    with right:
        st.selectbox("Source type", list(CitationSourceType), format_func=SOURCE_TYPE_LABELS.get, key="source_type")

    st.text_area(FORM_FIELDS["authors_raw"], key="authors_raw", height=100)
    for key, label in FORM_FIELDS.items():
        if key != "authors_raw":
            st.text_input(label, key=key)

    result = engine.format(_entry_from_state())
    st.subheader("Citation")
    st.code(result.citation or "", language=None)
    for code in result.sorted_warnings():
        st.warning(warning_label(code, locale))

    st.divider()
    st.subheader("Batch parse")
    batch = st.text_area("Citation list", placeholder="Paste one citation per line...", height=200)
    if st.button("Parse list"):
        rows = _build_rows(engine, batch)
        if not rows:
            st.info("No citations detected. Add one citation per line.")
            return
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


if __name__ == "__main__":
    main()
