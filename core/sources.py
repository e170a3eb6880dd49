import logging
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any, Dict, Iterable, List

from core.types import HealthRecord

logger = logging.getLogger(__name__)

UPLOAD_TYPES = ["pdf", "csv", "txt", "xml"]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# Fixed demo client used for the full report preview
DEMO_CLIENT: Dict[str, Any] = {
    "client": {
        "name": "Sarah Johnson",
        "dateOfBirth": "1978-05-15",
    },
    "demographics": {
        "age": 45, "gender": "female", "height": 165, "weight": 68,
        "ethnicity": "Caucasian", "occupation": "Marketing Manager",
    },
    "biometrics": {
        "bmi": 25.0, "bodyFatPercentage": 28,
        "waistCircumference": 85, "hipCircumference": 98,
        "bloodPressure": {"systolic": 125, "diastolic": 82, "pulse": 72},
        "restingHeartRate": 72,
    },
    "labValues": {
        # metabolic
        "glucose": 92, "hba1c": 5.4, "insulin": 8.2, "creatinine": 0.9, "bun": 15, "eGFR": 95,
        "sodium": 140, "potassium": 4.2, "chloride": 102,
        # lipids
        "totalCholesterol": 195, "hdl": 58, "ldl": 115, "triglycerides": 110, "nonHdlCholesterol": 137,
        # liver
        "alt": 22, "ast": 20, "albumin": 4.2, "totalBilirubin": 0.8,
        # inflammation
        "cReactiveProtein": 1.8, "esr": 12,
        # thyroid
        "tsh": 2.1, "t3": 3.2, "t4": 1.1, "reverseT3": 18,
        # vitamins & minerals
        "vitaminD": 32, "vitaminB12": 450, "folate": 12, "iron": 95, "ferritin": 65, "transferrin": 280,
        "homocysteine": 8.5, "uricAcid": 5.2, "magnesium": 2.1, "zinc": 95,
        # CBC
        "wbc": 6.8, "rbc": 4.5, "hemoglobin": 13.5, "hematocrit": 40.2, "platelets": 285,
    },
    "lifestyle": {
        "smoker": False, "diabetes": False,
        "alcoholConsumption": "moderate", "exerciseFrequency": 3,
        "sleepHours": 7, "sleepQuality": "good", "stressLevel": "moderate",
    },
    "familyHistory": {
        "paternalGrandfather": {"alive": False, "ageAtDeath": 78, "causeOfDeath": "Heart attack",
                                "conditions": ["Hypertension", "Coronary artery disease"]},
        "paternalGrandmother": {"alive": True, "currentAge": 85,
                                "conditions": ["Osteoporosis", "Mild cognitive impairment"]},
        "father": {"alive": True, "currentAge": 72, "conditions": ["Type 2 Diabetes", "High cholesterol"]},
        "maternalGrandfather": {"alive": False, "ageAtDeath": 82, "causeOfDeath": "Stroke",
                                "conditions": ["Hypertension", "Atrial fibrillation"]},
        "maternalGrandmother": {"alive": False, "ageAtDeath": 75, "causeOfDeath": "Breast cancer",
                                "conditions": ["Breast cancer", "Osteoporosis"]},
        "mother": {"alive": True, "currentAge": 68, "conditions": ["Hypothyroidism", "Osteoarthritis"]},
        "siblings": [
            {"gender": "male", "age": 47, "conditions": ["None known"]},
            {"gender": "female", "age": 41, "conditions": ["Anxiety", "PCOS"]},
        ],
    },
}

# What the upload path "extracts" until a real document pipeline exists
UPLOAD_EXTRACT: Dict[str, Any] = {
    "client": {"name": "John Doe"},
    "demographics": {"age": 52, "gender": "male", "height": 178, "weight": 85},
    "labValues": {
        "glucose": 98, "cholesterol": 195, "hdl": 45, "triglycerides": 135,
        "creatinine": 1.1, "albumin": 4.0,
    },
}


def record_from_dict(payload: Dict[str, Any]) -> HealthRecord:
    if "extractedData" in payload:
        inner = dict(payload["extractedData"])
        inner.setdefault("client", payload.get("client", {}))
        inner.setdefault("method", payload.get("method"))
        payload = inner
    return HealthRecord.from_dict(payload)


def demo_record() -> HealthRecord:
    rec = HealthRecord.from_dict(DEMO_CLIENT)
    rec.method = "demo"
    rec.timestamp = _now()
    return rec


def file_info(files: Iterable[Any]) -> List[Dict[str, Any]]:
    """Name/size/type of uploaded files."""
    out = []
    for f in files:
        out.append({
            "name": getattr(f, "name", str(f)),
            "size": getattr(f, "size", None),
            "type": getattr(f, "type", None),
        })
    return out


def accepted(name: str) -> bool:
    return PurePath(name).suffix.lower().lstrip(".") in UPLOAD_TYPES


def upload_stub(files: Iterable[Any]) -> Dict[str, Any]:
    info = [f for f in file_info(files) if accepted(f["name"])]
    logger.info("upload stub used for %d file(s); returning canned data", len(info))
    ts = _now()
    extracted = {k: dict(v) for k, v in UPLOAD_EXTRACT.items() if k != "client"}
    extracted["timestamp"] = ts
    return {
        "method": "upload",
        "files": info,
        "client": {**UPLOAD_EXTRACT["client"], "age": 52, "gender": "male"},
        "extractedData": extracted,
    }


# --- reports kept for the session ("existing reports") ---

def store_report(reports: List[Dict[str, Any]], record: HealthRecord, rows: List[list]) -> Dict[str, Any]:
    entry = {
        "client": record.demographics.name or "Unnamed client",
        "method": record.method or "manual",
        "timestamp": record.timestamp or _now(),
        "record": record.to_dict(),
        "rows": [list(r) for r in rows],
    }
    reports.append(entry)
    return entry


def reopen_report(entry: Dict[str, Any]) -> HealthRecord:
    rec = HealthRecord.from_dict(entry["record"])
    rec.method = "existing"
    return rec


def report_table(entry: Dict[str, Any]) -> List[Dict[str, str]]:
    return [dict(zip(("Metric", "Value", "Interpretation"), r)) for r in entry.get("rows", [])]
