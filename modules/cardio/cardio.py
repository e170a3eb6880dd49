from typing import Any, Dict, List, Optional
import streamlit as st
from core.types import HealthRecord, ResultItem
from core.utils import num_input, pdf_rows, render_results, severity, wkey
from scores import ascvd_risk

id = "cardio"
title = "Cardiovascular: 10-year risk estimate (simplified ASCVD)"

ADVICE = {
    "Low": "Low estimated risk — maintain current habits; recheck lipids every few years.",
    "Moderate": "Moderate risk — review lipids, blood pressure and activity with a clinician.",
    "High": "High risk — clinical evaluation and risk-factor treatment advised.",
}


# ---------- UI inputs ----------
def inputs(data: HealthRecord) -> HealthRecord:
    labs = data.lab_values
    bp = data.biometrics.blood_pressure
    life = data.lifestyle

    c1, c2, c3 = st.columns(3)
    with c1:
        tc = num_input("Total Cholesterol (mg/dL)", "cardio_tc", labs.total_cholesterol, 50.0, 500.0)
        hdl = num_input("HDL-C (mg/dL)", "cardio_hdl", labs.hdl, 5.0, 150.0)
    with c2:
        sbp = num_input("Systolic BP (mmHg)", "cardio_sbp", bp.systolic, 70.0, 250.0)
    with c3:
        smoker = st.selectbox("Current smoker", ["No", "Yes"], index=1 if life.smoker else 0, key=wkey("cardio_smkr"))
        diabetes = st.selectbox("Known diabetes", ["No", "Yes"], index=1 if life.diabetes else 0, key=wkey("cardio_dm"))

    # write back to shared record
    labs.total_cholesterol = tc
    labs.hdl = hdl
    if sbp is not bp.systolic:  # widget value; out-of-range values come back as-is
        bp.systolic = int(sbp) if sbp is not None else None
    life.smoker = smoker == "Yes"
    life.diabetes = diabetes == "Yes"
    return data


# ---------- compute ----------
def compute(data: HealthRecord, options: Optional[Dict[str, Any]] = None) -> List[ResultItem]:
    d = data.demographics
    labs = data.lab_values
    risk = ascvd_risk(
        d.age, d.gender,
        cholesterol=labs.total_cholesterol,
        hdl=labs.hdl,
        systolic_bp=data.biometrics.blood_pressure.systolic,
        diabetes=data.lifestyle.diabetes,
        smoker=data.lifestyle.smoker,
    )
    if risk is None:
        return []

    results = [ResultItem("Cardiovascular risk (%)", risk.value, f"{risk.level} — {ADVICE[risk.level]}", severity(risk.level))]

    missing = [n for n, v in (("cholesterol", labs.total_cholesterol), ("HDL", labs.hdl),
                              ("systolic BP", data.biometrics.blood_pressure.systolic)) if v is None]
    if missing:
        results.append(ResultItem(metric="", value=None, interpretation="Note: not measured, left out of the score: " + ", ".join(missing) + ".", severity="info"))
    return results


# ---------- render ----------
def render(results: List[ResultItem]) -> None:
    render_results(results)


# ---------- pdf rows ----------
def to_pdf(results: List[ResultItem]) -> List[list[str]]:
    return pdf_rows(results)
