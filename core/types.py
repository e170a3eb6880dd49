import re
from dataclasses import dataclass, field, fields
from typing import Protocol, List, Dict, Any, Optional

GENDERS = ("male", "female")
# relations stored as lists in the record dict
LIST_RELATIONS = ("siblings", "children")


def _snake(key: str) -> str:
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", key).lower()


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(p[:1].upper() + p[1:] for p in rest)


def _fill(cls, raw: Optional[Dict[str, Any]], **aliases):
    """Build a flat dataclass from a camelCase dict, ignoring unknown keys."""
    raw = raw or {}
    names = {f.name for f in fields(cls)}
    kw = {}
    for k, v in raw.items():
        k = aliases.get(k, _snake(k))
        if k in names and not isinstance(v, (dict, list)):
            kw[k] = v
    return cls(**kw)


def _dump(obj, skip=()) -> Dict[str, Any]:
    return {_camel(f.name): getattr(obj, f.name) for f in fields(obj)
            if f.name not in skip and getattr(obj, f.name) is not None}


@dataclass(frozen=True)
class RiskScore:
    value: float
    level: str

    def as_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "level": self.level}


@dataclass
class Demographics:
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None  # "male"/"female"
    height: Optional[float] = None  # cm
    weight: Optional[float] = None  # kg
    ethnicity: Optional[str] = None
    occupation: Optional[str] = None
    date_of_birth: Optional[str] = None


@dataclass
class BloodPressure:
    systolic: Optional[int] = None
    diastolic: Optional[int] = None
    pulse: Optional[int] = None


@dataclass
class Biometrics:
    bmi: Optional[float] = None
    waist_circumference: Optional[float] = None  # cm
    hip_circumference: Optional[float] = None  # cm
    blood_pressure: BloodPressure = field(default_factory=BloodPressure)
    resting_heart_rate: Optional[int] = None
    body_fat_percentage: Optional[float] = None


@dataclass
class LabValues:
    glucose: Optional[float] = None  # mg/dL
    hba1c: Optional[float] = None
    total_cholesterol: Optional[float] = None  # mg/dL
    hdl: Optional[float] = None
    ldl: Optional[float] = None
    triglycerides: Optional[float] = None
    creatinine: Optional[float] = None  # mg/dL
    albumin: Optional[float] = None  # g/dL
    c_reactive_protein: Optional[float] = None  # mg/L
    extra: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "LabValues":
        labs = _fill(cls, raw, cholesterol="total_cholesterol")
        known = {f.name for f in fields(cls)}
        for k, v in (raw or {}).items():
            if k != "cholesterol" and _snake(k) not in known and isinstance(v, (int, float)):
                labs.extra[k] = float(v)
        return labs

    def to_dict(self) -> Dict[str, Any]:
        d = _dump(self, skip=("extra",))
        d.update(self.extra)
        return d


@dataclass
class Lifestyle:
    exercise_frequency: Optional[int] = None  # sessions/week
    smoker: bool = False
    diabetes: bool = False
    alcohol_consumption: Optional[str] = None  # none/light/moderate/heavy
    sleep_hours: Optional[float] = None
    sleep_quality: Optional[str] = None  # poor/fair/good/excellent
    stress_level: Optional[str] = None  # low/moderate/high


@dataclass
class Relative:
    relation: str = ""
    alive: Optional[bool] = None
    age: Optional[int] = None
    age_at_death: Optional[int] = None
    cause_of_death: Optional[str] = None
    gender: Optional[str] = None
    conditions: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, relation: str, raw: Dict[str, Any]) -> "Relative":
        r = _fill(cls, raw, currentAge="age")
        r.relation = relation
        r.conditions = [str(c) for c in raw.get("conditions", [])]
        return r

    def to_dict(self) -> Dict[str, Any]:
        return _dump(self, skip=("relation",))


@dataclass
class FamilyHistory:
    relatives: List[Relative] = field(default_factory=list)
    diabetes_flag: Optional[bool] = None

    @property
    def diabetes(self) -> bool:
        if self.diabetes_flag is not None:
            return bool(self.diabetes_flag)
        return any("diabet" in c.lower() for r in self.relatives for c in r.conditions)

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "FamilyHistory":
        fh = cls()
        for k, v in (raw or {}).items():
            if k == "diabetes":
                fh.diabetes_flag = bool(v)
            elif isinstance(v, list):
                fh.relatives += [Relative.from_dict(k, x) for x in v if isinstance(x, dict)]
            elif isinstance(v, dict):
                fh.relatives.append(Relative.from_dict(k, v))
        return fh

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {}
        for r in self.relatives:
            if r.relation in LIST_RELATIONS:
                d.setdefault(r.relation, []).append(r.to_dict())
            else:
                d[r.relation] = r.to_dict()
        if self.diabetes_flag is not None:
            d["diabetes"] = self.diabetes_flag
        return d


@dataclass
class HealthRecord:
    demographics: Demographics = field(default_factory=Demographics)
    biometrics: Biometrics = field(default_factory=Biometrics)
    lab_values: LabValues = field(default_factory=LabValues)
    lifestyle: Lifestyle = field(default_factory=Lifestyle)
    family_history: FamilyHistory = field(default_factory=FamilyHistory)
    method: Optional[str] = None  # manual/upload/demo/existing
    timestamp: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "HealthRecord":
        demo = _fill(Demographics, {**raw.get("client", {}), **raw.get("demographics", {})})
        bio_raw = raw.get("biometrics", {})
        bio = _fill(Biometrics, bio_raw)
        bio.blood_pressure = _fill(BloodPressure, bio_raw.get("bloodPressure"))
        return cls(
            demographics=demo,
            biometrics=bio,
            lab_values=LabValues.from_dict(raw.get("labValues")),
            lifestyle=_fill(Lifestyle, raw.get("lifestyle")),
            family_history=FamilyHistory.from_dict(raw.get("familyHistory")),
            method=raw.get("method"),
            timestamp=raw.get("timestamp"),
        )

    def to_dict(self) -> Dict[str, Any]:
        bio = _dump(self.biometrics, skip=("blood_pressure",))
        bp = _dump(self.biometrics.blood_pressure)
        if bp:
            bio["bloodPressure"] = bp
        d = {
            "demographics": _dump(self.demographics),
            "biometrics": bio,
            "labValues": self.lab_values.to_dict(),
            "lifestyle": _dump(self.lifestyle),
            "familyHistory": self.family_history.to_dict(),
        }
        if self.method:
            d["method"] = self.method
        if self.timestamp:
            d["timestamp"] = self.timestamp
        return d


def validate_record(record: HealthRecord) -> List[str]:
    """Boundary checks run before scoring; the scores themselves never raise."""
    problems: List[str] = []
    d = record.demographics
    if d.age is not None and d.age < 0:
        problems.append("Age cannot be negative.")
    if d.height is not None and d.height <= 0:
        problems.append("Height must be greater than zero.")
    if d.weight is not None and d.weight <= 0:
        problems.append("Weight must be greater than zero.")
    if d.gender is not None and d.gender not in GENDERS:
        problems.append(f"Unknown gender '{d.gender}' (expected male or female).")
    return problems


@dataclass
class ResultItem:
    metric: str
    value: Optional[float] | str
    interpretation: str
    severity: str  # "low" | "indeterminate" | "high" | "info"

class HealthModule(Protocol):
    id: str
    title: str
    def inputs(self, data: HealthRecord) -> HealthRecord: ...
    def compute(self, data: HealthRecord, options: Optional[Dict[str, Any]] = None) -> List[ResultItem]: ...
    def render(self, results: List[ResultItem]) -> None: ...
    def to_pdf(self, results: List[ResultItem]) -> List[list[str]]: ...
