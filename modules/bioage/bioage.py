from typing import Any, Dict, List, Optional
import streamlit as st
from core.types import HealthRecord, ResultItem
from core.utils import num_input, pdf_rows, render_results
from scores import phenotypic_age, round1

id = "bioage"
title = "Biological age: phenotypic age estimate"

# labs that feed the estimate: (attribute, label, lo, hi, step)
LABS = [
    ("albumin", "Albumin (g/dL)", 1.0, 6.0, 0.1),
    ("creatinine", "Creatinine (mg/dL)", 0.1, 15.0, 0.1),
    ("glucose", "Fasting glucose (mg/dL)", 40.0, 500.0, 1.0),
    ("c_reactive_protein", "C-reactive protein (mg/L)", 0.0, 200.0, 0.1),
]


def inputs(data: HealthRecord) -> HealthRecord:
    labs = data.lab_values
    for col, (attr, label, lo, hi, step) in zip(st.columns(len(LABS)), LABS):
        with col:
            setattr(labs, attr, num_input(label, f"bioage_{attr}", getattr(labs, attr), lo, hi, step))
    return data


def compute(data: HealthRecord, options: Optional[Dict[str, Any]] = None) -> List[ResultItem]:
    age = data.demographics.age
    labs = data.lab_values
    est = phenotypic_age(age, labs.albumin, labs.creatinine, labs.glucose, labs.c_reactive_protein)
    if est is None:
        return []

    gap = est - age
    if gap <= 0:
        interp, sev = "In line with chronological age.", "low"
    elif gap <= 5:
        interp, sev = f"{round1(gap)} years above chronological age — modest lab-driven ageing.", "indeterminate"
    else:
        interp, sev = f"{round1(gap)} years above chronological age — review flagged labs with a clinician.", "high"
    r = [ResultItem("Biological age (years)", round1(est), interp, sev)]

    missing = [label for attr, label, *_ in LABS if not getattr(labs, attr)]
    if missing:
        r.append(ResultItem(metric="", value=None, interpretation="Note: not measured: " + ", ".join(missing) + ".", severity="info"))
    return r


def render(results: List[ResultItem]) -> None:
    render_results(results)


def to_pdf(results: List[ResultItem]) -> List[list[str]]:
    return pdf_rows(results)
