from typing import Optional
import streamlit as st

from core.sources import UPLOAD_TYPES, record_from_dict, upload_stub
from core.types import (
    BloodPressure, Biometrics, Demographics, FamilyHistory, HealthRecord, LabValues, Lifestyle,
)


def _opt(label: str, key: str, lo: float, hi: float, step: float = 1.0) -> Optional[float]:
    # number_input with value=None leaves the field blank ("not measured")
    return st.number_input(label, min_value=lo, max_value=hi, value=None, step=step, key=key)


def manual_entry() -> Optional[HealthRecord]:
    with st.form("manual_entry"):
        st.markdown("**Demographics**")
        c1, c2, c3, c4 = st.columns(4)
        with c1:
            name = st.text_input("Client name", key="m_name")
            gender = st.selectbox("Gender", ["female", "male"], key="m_gender")
        with c2:
            age = st.number_input("Age (years)", min_value=0, max_value=120, value=40, step=1, key="m_age")
            height = st.number_input("Height (cm)", min_value=50.0, max_value=250.0, value=170.0, step=0.5, key="m_height")
        with c3:
            weight = st.number_input("Weight (kg)", min_value=20.0, max_value=300.0, value=70.0, step=0.5, key="m_weight")
            waist = _opt("Waist (cm)", "m_waist", 40.0, 200.0, 0.5)
        with c4:
            sbp = _opt("Systolic BP (mmHg)", "m_sbp", 70.0, 250.0)
            dbp = _opt("Diastolic BP (mmHg)", "m_dbp", 40.0, 150.0)

        st.markdown("**Lab values** (leave blank if not measured)")
        l1, l2, l3, l4 = st.columns(4)
        with l1:
            glucose = _opt("Fasting glucose (mg/dL)", "m_glu", 40.0, 500.0)
            hba1c = _opt("HbA1c (%)", "m_a1c", 3.0, 20.0, 0.1)
        with l2:
            chol = _opt("Total cholesterol (mg/dL)", "m_tc", 50.0, 500.0)
            hdl = _opt("HDL (mg/dL)", "m_hdl", 5.0, 150.0)
        with l3:
            tg = _opt("Triglycerides (mg/dL)", "m_tg", 10.0, 2000.0)
            creat = _opt("Creatinine (mg/dL)", "m_cr", 0.1, 15.0, 0.1)
        with l4:
            alb = _opt("Albumin (g/dL)", "m_alb", 1.0, 6.0, 0.1)
            crp = _opt("C-reactive protein (mg/L)", "m_crp", 0.0, 200.0, 0.1)

        st.markdown("**Lifestyle & family**")
        f1, f2, f3, f4 = st.columns(4)
        with f1:
            exercise = st.number_input("Exercise sessions / week", min_value=0, max_value=21, value=3, step=1, key="m_ex")
        with f2:
            smoker = st.checkbox("Current smoker", key="m_smoker")
            diabetes = st.checkbox("Known diabetes", key="m_dm")
        with f3:
            alcohol = st.selectbox("Alcohol", ["none", "light", "moderate", "heavy"], key="m_alc")
            stress = st.selectbox("Stress", ["low", "moderate", "high"], index=1, key="m_stress")
        with f4:
            fam_dm = st.checkbox("Parent/sibling with diabetes", key="m_famdm")

        submitted = st.form_submit_button("Start assessment")

    if not submitted:
        return None

    return HealthRecord(
        demographics=Demographics(name=name or None, age=int(age), gender=gender, height=height, weight=weight),
        biometrics=Biometrics(
            waist_circumference=waist,
            blood_pressure=BloodPressure(
                systolic=int(sbp) if sbp is not None else None,
                diastolic=int(dbp) if dbp is not None else None,
            ),
        ),
        lab_values=LabValues(
            glucose=glucose, hba1c=hba1c, total_cholesterol=chol, hdl=hdl, triglycerides=tg,
            creatinine=creat, albumin=alb, c_reactive_protein=crp,
        ),
        lifestyle=Lifestyle(
            exercise_frequency=int(exercise), smoker=smoker, diabetes=diabetes,
            alcohol_consumption=alcohol, stress_level=stress,
        ),
        family_history=FamilyHistory(diabetes_flag=fam_dm),
        method="manual",
    )


def upload_entry() -> Optional[HealthRecord]:
    ups = st.file_uploader(
        "Upload lab reports", type=UPLOAD_TYPES, accept_multiple_files=True, key="upload_files",
    )
    st.caption("Automatic extraction is not available yet; a sample extraction is shown for review.")
    if not ups or not st.button("Process files"):
        return None

    with st.spinner("Processing files..."):
        payload = upload_stub(ups)
    st.success("Extracted from upload:")
    st.json({"files": payload["files"], **payload["extractedData"]})
    return record_from_dict(payload)
