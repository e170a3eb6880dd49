from typing import Any, Dict, List, Optional
import streamlit as st
from core.types import HealthRecord, ResultItem
from core.utils import num_input, pdf_rows, render_results

from scores import bmi, round1

id = "body"
title = "Body composition: BMI"


def inputs(data: HealthRecord) -> HealthRecord:
    d = data.demographics
    bio = data.biometrics
    c1, c2, c3 = st.columns(3)
    with c1:
        height = num_input("Height (cm)", "body_height", d.height, 50.0, 250.0, 0.5)
    with c2:
        weight = num_input("Weight (kg)", "body_weight", d.weight, 20.0, 300.0, 0.5)
    with c3:
        hip = num_input("Hip (cm)", "body_hip", bio.hip_circumference, 40.0, 200.0, 0.5)

    d.height = height
    d.weight = weight
    bio.hip_circumference = hip
    # derived
    bio.bmi = bmi(weight, height)
    return data


def bmi_class(value: float) -> tuple[str, str]:
    if value < 18.5:
        return "Underweight", "indeterminate"
    if value < 25:
        return "Normal weight", "low"
    if value < 30:
        return "Overweight", "indeterminate"
    if value < 35:
        return "Obesity class I", "high"
    if value < 40:
        return "Obesity class II", "high"
    return "Obesity class III", "high"


def compute(data: HealthRecord, options: Optional[Dict[str, Any]] = None) -> List[ResultItem]:
    d = data.demographics
    bio = data.biometrics
    r: List[ResultItem] = []

    b = bmi(d.weight, d.height)
    if b is None:
        b = bio.bmi
    if b is not None:
        label, sev = bmi_class(b)
        r.append(ResultItem("BMI (kg/m²)", b, label, sev))

    waist, hip = bio.waist_circumference, bio.hip_circumference
    if waist and hip:
        whr = round(waist / hip, 2)
        cut = 0.90 if d.gender == "male" else 0.85
        if whr < cut:
            r.append(ResultItem("Waist/hip ratio", whr, "Within healthy range.", "low"))
        else:
            r.append(ResultItem("Waist/hip ratio", whr, "Central adiposity — raises cardiometabolic risk.", "high"))

    if bio.body_fat_percentage is not None:
        r.append(ResultItem("Body fat (%)", round1(bio.body_fat_percentage), "Reported", "info"))
    return r


def render(results: List[ResultItem]) -> None:
    render_results(results)


def to_pdf(results: List[ResultItem]) -> List[list[str]]:
    return pdf_rows(results)
