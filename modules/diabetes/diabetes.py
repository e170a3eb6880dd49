from typing import Any, Dict, List, Optional
import streamlit as st
from core.types import HealthRecord, ResultItem
from core.utils import num_input, pdf_rows, render_results, severity, wkey
from scores import bmi, findrisc

id = "diabetes"
title = "Diabetes: FINDRISC score"

# approximate 10-year type 2 diabetes risk quoted with each FINDRISC band
BAND_TEXT = {
    "Low": "about 1 in 100 will develop type 2 diabetes within 10 years.",
    "Slightly elevated": "about 1 in 25 will develop type 2 diabetes within 10 years.",
    "Moderate": "about 1 in 6 will develop type 2 diabetes within 10 years.",
    "High": "about 1 in 3 will develop type 2 diabetes within 10 years; testing advised.",
    "Very high": "about 1 in 2 will develop type 2 diabetes within 10 years; see a clinician.",
}


def inputs(data: HealthRecord) -> HealthRecord:
    bio = data.biometrics
    c1, c2, c3 = st.columns(3)
    with c1:
        waist = num_input("Waist (cm)", "dm_waist", bio.waist_circumference, 40.0, 200.0, 0.5)
    with c2:
        ex = num_input("Exercise sessions / week", "dm_ex", data.lifestyle.exercise_frequency, 0.0, 21.0)
        glucose = num_input("Fasting glucose (mg/dL)", "dm_glu", data.lab_values.glucose, 40.0, 500.0)
    with c3:
        fam = st.selectbox("Family history of diabetes", ["No", "Yes"], index=1 if data.family_history.diabetes else 0, key=wkey("dm_fam"))

    bio.waist_circumference = waist
    if ex is not data.lifestyle.exercise_frequency:
        data.lifestyle.exercise_frequency = int(ex) if ex is not None else None
    data.lab_values.glucose = glucose
    data.family_history.diabetes_flag = fam == "Yes"
    return data


def _bmi(data: HealthRecord) -> Optional[float]:
    b = bmi(data.demographics.weight, data.demographics.height)
    return b if b is not None else data.biometrics.bmi


def compute(data: HealthRecord, options: Optional[Dict[str, Any]] = None) -> List[ResultItem]:
    options = options or {}
    r = findrisc(
        data.demographics.age,
        _bmi(data),
        data.biometrics.waist_circumference,
        data.lifestyle.exercise_frequency,
        data.family_history.diabetes,
        data.lab_values.glucose,
        gender=data.demographics.gender,
        sex_specific_waist=bool(options.get("sex_specific_waist", False)),
    )
    return [ResultItem("FINDRISC score", r.value, f"{r.level} — {BAND_TEXT[r.level]}", severity(r.level))]


def render(results: List[ResultItem]) -> None:
    render_results(results)


def to_pdf(results: List[ResultItem]) -> List[list[str]]:
    return pdf_rows(results)
