from typing import List
import streamlit as st
from core.types import ResultItem

PALETTE = {
    "low": "#2e7d32",
    "indeterminate": "#f9a825",
    "high": "#c62828",
    "info": "#455a64",
}

# risk level label -> palette key
SEVERITY = {
    "Low": "low",
    "Slightly elevated": "indeterminate",
    "Moderate": "indeterminate",
    "High": "high",
    "Very high": "high",
}


def severity(level: str) -> str:
    return SEVERITY.get(level, "info")


def color_box(text: str, level: str = "info"):
    col = PALETTE.get(level, "#455a64")
    st.markdown(
        f"""
        <div style=\"background:{col};padding:12px;border-radius:8px;color:white;font-weight:600;\">{text}</div>
        """,
        unsafe_allow_html=True,
    )


def render_results(results: List[ResultItem]) -> None:
    st.subheader("Results")
    if not results:
        st.info("Not enough data for this score.")
    for x in results:
        if x.metric:
            color_box(f"{x.metric}: {x.value} • {x.interpretation}", level=x.severity)
        else:
            color_box(x.interpretation, level=x.severity)


def pdf_rows(results: List[ResultItem]) -> List[list[str]]:
    rows = []
    for x in results:
        if x.metric:
            rows.append([x.metric, "—" if x.value is None else str(x.value), x.interpretation])
    return rows


def wkey(name: str) -> str:
    # widget keys change with each loaded record so inputs pick up its values
    return f"{name}_{st.session_state.get('record_rev', 0)}"


def num_input(label: str, name: str, value, lo: float, hi: float, step: float = 1.0):
    # out-of-range stored values are shown, not edited, so the record keeps them
    if value is not None and not (isinstance(value, (int, float)) and lo <= value <= hi):
        st.warning(f"{label}: recorded value {value} is outside {lo:g}–{hi:g}; kept unchanged.")
        return value
    if value is not None:
        value = float(value)
    return st.number_input(label, min_value=lo, max_value=hi, value=value, step=step, key=wkey(name))
