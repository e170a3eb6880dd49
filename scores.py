import math
from typing import Any, Optional
from core.types import RiskScore

# --- helpers ---

def _num(x: Any) -> Optional[float]:
    try:
        if x is None or x == "":
            return None
        v = float(x)
        return v if math.isfinite(v) else None
    except (TypeError, ValueError):
        return None


def round1(x: float) -> float:
    # half-up on the tenths digit (Python's round() is half-even)
    v = x * 10 + 0.5
    return math.floor(v) / 10 if math.isfinite(v) else x


# --- BMI ---

def bmi(weight_kg, height_cm) -> Optional[float]:
    w, h = _num(weight_kg), _num(height_cm)
    if w is None or h is None or h <= 0:
        return None
    h_m = h / 100.0
    q = w / (h_m * h_m)
    return round1(q) if math.isfinite(q) else None


# --- Cardiovascular (simplified ASCVD, additive) ---

ASCVD_HIGH = 20.0
ASCVD_MODERATE = 7.5


def ascvd_level(pct: float) -> str:
    if pct > ASCVD_HIGH:
        return "High"
    if pct > ASCVD_MODERATE:
        return "Moderate"
    return "Low"


def ascvd_risk(age, gender, cholesterol=None, hdl=None, systolic_bp=None,
               diabetes: bool = False, smoker: bool = False) -> Optional[RiskScore]:
    age = _num(age)
    if age is None:
        return None
    chol, hdl, sbp = _num(cholesterol), _num(hdl), _num(systolic_bp)

    s = (age - 40) * (0.5 if gender == "male" else 0.4)
    if chol is not None and chol > 200:
        s += (chol - 200) * 0.01
    if hdl is not None and hdl < 50:
        s += (50 - hdl) * 0.05
    if sbp is not None and sbp > 120:
        s += (sbp - 120) * 0.02
    if diabetes:
        s += 3
    if smoker:
        s += 2

    pct = max(0.0, min(50.0, s))
    return RiskScore(round1(pct), ascvd_level(pct))


# --- Phenotypic (biological) age ---

def phenotypic_age(age, albumin=None, creatinine=None, glucose=None, crp=None) -> Optional[float]:
    age = _num(age)
    if age is None:
        return None
    alb, cr, glu, crp = _num(albumin), _num(creatinine), _num(glucose), _num(crp)

    # a zero lab counts as "not measured"
    adj = 0.0
    if alb and alb < 4.0:
        adj += (4.0 - alb) * 5
    if cr and cr > 1.0:
        adj += (cr - 1.0) * 10
    if glu and glu > 100:
        adj += (glu - 100) * 0.1
    if crp and crp > 3:
        adj += (crp - 3) * 0.5
    est = age + adj
    return est if math.isfinite(est) else None


# --- FINDRISC ---

FINDRISC_LEVELS = (
    (7, "Low"),
    (12, "Slightly elevated"),
    (15, "Moderate"),
    (20, "High"),
)


def findrisc_level(points: int) -> str:
    for upper, label in FINDRISC_LEVELS:
        if points < upper:
            return label
    return "Very high"


def findrisc(age, bmi_value=None, waist=None, exercise_frequency=None,
             family_diabetes: bool = False, glucose=None,
             gender: Optional[str] = None, sex_specific_waist: bool = False) -> RiskScore:
    age, b, w = _num(age), _num(bmi_value), _num(waist)
    ex, glu = _num(exercise_frequency), _num(glucose)
    pts = 0

    if age is not None:
        if 45 <= age < 55:
            pts += 2
        elif 55 <= age < 65:
            pts += 3
        elif age >= 65:
            pts += 4

    if b is not None:
        if 25 <= b < 30:
            pts += 1
        elif b >= 30:
            pts += 3

    if w is not None:
        if sex_specific_waist and gender in ("male", "female"):
            if w > (94 if gender == "male" else 80):
                pts += 3
        else:
            # both cut-offs apply regardless of gender
            if w > 94:
                pts += 3
            if w > 80:
                pts += 3

    if ex is not None and ex < 4:
        pts += 2
    if family_diabetes:
        pts += 5
    if glu is not None and glu > 100:
        pts += 5

    return RiskScore(pts, findrisc_level(pts))
