"""
Chemical property database and lookup providers.

Properties relevant for hazard modeling, based on the ALOHA chemical
library: molecular weight for unit conversion, IDLH and the three AEGL
tiers (60 min) that drive the red/orange/yellow hazard zones.

Lookups are keyed by a case-insensitive chemical name.  A missing record is
not an error: callers receive None and fall back to default thresholds.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from config import MOLAR_VOLUME_L, PPM_PER_PERCENT

CONCENTRATION_UNITS = ("mg/m3", "ppm", "percent")


@dataclass(frozen=True)
class ChemicalProperties:
    """Hazard-relevant properties of a single chemical.

    Exposure limits are in ppm.  A tier of 0 or None means "not established"
    and is treated as missing by the hazard zone model.
    """

    name: str
    cas: str
    molecular_weight: float          # g/mol
    boiling_point: float             # degC
    vapor_pressure: float            # mmHg at 20 degC
    specific_gravity: float          # relative to water
    water_solubility: str
    idlh: float                      # Immediately Dangerous to Life or Health
    lel: float                       # Lower Explosive Limit (% by volume)
    uel: float                       # Upper Explosive Limit (% by volume)
    aegl1: Optional[float]
    aegl2: Optional[float]
    aegl3: Optional[float]
    erpg1: Optional[float] = None
    erpg2: Optional[float] = None
    erpg3: Optional[float] = None
    description: str = ""
    hazards: tuple = field(default_factory=tuple)
    color: str = "#cccccc"


_CHEMICALS = {
    "chlorine": ChemicalProperties(
        name="Chlorine", cas="7782-50-5", molecular_weight=70.91,
        boiling_point=-34.04, vapor_pressure=5168, specific_gravity=1.41,
        water_solubility="Slightly soluble", idlh=10, lel=0, uel=0,
        aegl1=0.5, aegl2=2.0, aegl3=20.0, erpg1=1, erpg2=3, erpg3=20,
        description="Greenish-yellow gas with a pungent, irritating odor. "
                    "Used in water treatment and manufacturing.",
        hazards=("Respiratory irritant", "Oxidizer", "Environmental hazard"),
        color="#c5e17a",
    ),
    "ammonia": ChemicalProperties(
        name="Ammonia", cas="7664-41-7", molecular_weight=17.03,
        boiling_point=-33.34, vapor_pressure=6870, specific_gravity=0.682,
        water_solubility="Very soluble", idlh=300, lel=15, uel=28,
        aegl1=30, aegl2=160, aegl3=1100, erpg1=25, erpg2=150, erpg3=750,
        description="Colorless gas with a strong, pungent odor. Used in "
                    "fertilizers, refrigeration, and manufacturing.",
        hazards=("Respiratory irritant", "Corrosive", "Flammable at high concentrations"),
        color="#e0f7fa",
    ),
    "hydrogen sulfide": ChemicalProperties(
        name="Hydrogen Sulfide", cas="7783-06-4", molecular_weight=34.08,
        boiling_point=-60.33, vapor_pressure=15600, specific_gravity=0.92,
        water_solubility="Moderately soluble", idlh=100, lel=4, uel=44,
        aegl1=0.51, aegl2=27, aegl3=50,
        description="Colorless gas with a strong rotten egg odor.",
        hazards=("Respiratory irritant", "Neurotoxic", "Flammable", "Odor fatigue risk"),
        color="#bca389",
    ),
    "sulfur dioxide": ChemicalProperties(
        name="Sulfur Dioxide", cas="7446-09-5", molecular_weight=64.07,
        boiling_point=-10.0, vapor_pressure=2538, specific_gravity=1.434,
        water_solubility="Very soluble", idlh=100, lel=0, uel=0,
        aegl1=0.2, aegl2=0.75, aegl3=30,
        description="Colorless gas with a strong, suffocating odor.",
        hazards=("Respiratory irritant", "Corrosive to tissue", "Environmental hazard"),
        color="#efe1d1",
    ),
    "methane": ChemicalProperties(
        name="Methane", cas="74-82-8", molecular_weight=16.04,
        boiling_point=-161.5, vapor_pressure=760000, specific_gravity=0.42,
        water_solubility="Slightly soluble", idlh=0, lel=5, uel=15,
        aegl1=0, aegl2=0, aegl3=0,   # Asphyxiant, no AEGLs established
        description="Colorless, odorless gas. Main component of natural gas.",
        hazards=("Asphyxiant", "Highly flammable", "Explosion hazard"),
        color="#cbe3f8",
    ),
    "carbon monoxide": ChemicalProperties(
        name="Carbon Monoxide", cas="630-08-0", molecular_weight=28.01,
        boiling_point=-191.5, vapor_pressure=760000, specific_gravity=0.97,
        water_solubility="Slightly soluble", idlh=1200, lel=12.5, uel=74,
        aegl1=0, aegl2=83, aegl3=330,
        description="Colorless, odorless gas produced by incomplete combustion.",
        hazards=("Asphyxiant", "Hemoglobin binding", "Flammable", "Difficult to detect"),
        color="#e57373",
    ),
    "benzene": ChemicalProperties(
        name="Benzene", cas="71-43-2", molecular_weight=78.11,
        boiling_point=80.1, vapor_pressure=75, specific_gravity=0.88,
        water_solubility="Slightly soluble", idlh=500, lel=1.2, uel=7.8,
        aegl1=52, aegl2=800, aegl3=4000,
        description="Colorless liquid with a sweet odor. Used as a solvent.",
        hazards=("Carcinogen", "Central nervous system depressant", "Flammable",
                 "Environmental hazard"),
        color="#ffecb3",
    ),
    "ethylene oxide": ChemicalProperties(
        name="Ethylene Oxide", cas="75-21-8", molecular_weight=44.05,
        boiling_point=10.4, vapor_pressure=1095, specific_gravity=0.882,
        water_solubility="Very soluble", idlh=800, lel=3, uel=100,
        aegl1=5, aegl2=45, aegl3=85,
        description="Colorless gas with a sweet ether-like odor. Used in sterilization.",
        hazards=("Carcinogen", "Mutagen", "Highly flammable", "Explosive", "Reactive"),
        color="#b39ddb",
    ),
    "hydrogen cyanide": ChemicalProperties(
        name="Hydrogen Cyanide", cas="74-90-8", molecular_weight=27.03,
        boiling_point=25.6, vapor_pressure=630, specific_gravity=0.687,
        water_solubility="Very soluble", idlh=50, lel=5.6, uel=40,
        aegl1=1.0, aegl2=7.1, aegl3=15,
        description="Colorless liquid or gas with a bitter almond odor.",
        hazards=("Highly toxic", "Metabolic poison", "Flammable", "Rapid acting"),
        color="#81d4fa",
    ),
    "phosgene": ChemicalProperties(
        name="Phosgene", cas="75-44-5", molecular_weight=98.92,
        boiling_point=8.3, vapor_pressure=1173, specific_gravity=1.432,
        water_solubility="Reacts with water", idlh=2, lel=0, uel=0,
        aegl1=0, aegl2=0.2, aegl3=0.59,
        description="Colorless gas with a musty hay odor. Used in chemical manufacturing.",
        hazards=("Pulmonary edema", "Delayed effects", "Corrosive", "Chemical weapon history"),
        color="#d1c4e9",
    ),
}

# Read-only view shared by every lookup
CHEMICAL_DATABASE: Mapping[str, ChemicalProperties] = MappingProxyType(_CHEMICALS)


def _key(identifier: str) -> str:
    return str(identifier).strip().lower()


class ChemicalLookup(ABC):
    """Abstract source of chemical properties, keyed case-insensitively."""

    @abstractmethod
    def get(self, identifier: str) -> Optional[ChemicalProperties]:
        """Return the record for a chemical, or None if unknown."""
        ...

    @abstractmethod
    def names(self) -> List[str]:
        """Return the lower-case identifiers this lookup knows."""
        ...


class BuiltinChemicalLookup(ChemicalLookup):
    """Serves the bundled chemical table."""

    def __init__(self, table: Mapping[str, ChemicalProperties] = CHEMICAL_DATABASE):
        self._table = table

    def get(self, identifier: str) -> Optional[ChemicalProperties]:
        return self._table.get(_key(identifier))

    def names(self) -> List[str]:
        return sorted(self._table.keys())


class FileChemicalLookup(ChemicalLookup):
    """Load chemical records from a JSON file on disk.

    The file holds a JSON array of objects whose keys match the
    ChemicalProperties fields.  Records are keyed by lower-cased name.

    Args:
        path: Path to the JSON file.

    Raises:
        ValueError: If the file is not a non-empty array or a record is
            missing required keys.
        FileNotFoundError: If the file does not exist.
    """

    _REQUIRED_KEYS = {"name", "molecular_weight", "idlh"}
    _DEFAULTS = {
        "cas": "", "boiling_point": 0.0, "vapor_pressure": 0.0,
        "specific_gravity": 0.0, "water_solubility": "", "lel": 0.0,
        "uel": 0.0, "aegl1": None, "aegl2": None, "aegl3": None,
    }

    def __init__(self, path: str):
        self._table = self._load(path)

    @classmethod
    def _load(cls, path: str) -> Dict[str, ChemicalProperties]:
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, list) or len(data) == 0:
            raise ValueError(f"Chemicals file must contain a non-empty JSON array: {path}")
        table = {}
        for i, record in enumerate(data):
            missing = cls._REQUIRED_KEYS - set(record.keys())
            if missing:
                raise ValueError(
                    f"Chemical #{i} missing required keys {missing} in {path}"
                )
            kwargs = {**cls._DEFAULTS, **record}
            kwargs["hazards"] = tuple(kwargs.get("hazards", ()))
            table[_key(record["name"])] = ChemicalProperties(**kwargs)
        return table

    def get(self, identifier: str) -> Optional[ChemicalProperties]:
        return self._table.get(_key(identifier))

    def names(self) -> List[str]:
        return sorted(self._table.keys())


def mg_per_ppm(molecular_weight: float) -> float:
    """mg/m^3 equivalent of 1 ppm for a gas of the given molecular weight."""
    return molecular_weight / MOLAR_VOLUME_L


def convert_concentration_unit(
    value: float,
    chemical: str,
    from_unit: str,
    to_unit: str,
    lookup: Optional[ChemicalLookup] = None,
) -> float:
    """
    Convert a concentration between mg/m3, ppm and percent by volume.

    Uses mg/m^3 = ppm * MW / 24.45.  For an unknown chemical the value is
    returned unchanged.

    Raises:
        ValueError: If either unit is not one of CONCENTRATION_UNITS.
    """
    for unit in (from_unit, to_unit):
        if unit not in CONCENTRATION_UNITS:
            raise ValueError(f"Unknown concentration unit '{unit}'. Use {CONCENTRATION_UNITS}.")
    if from_unit == to_unit:
        return value

    record = (lookup or BuiltinChemicalLookup()).get(chemical)
    if record is None:
        return value
    factor = mg_per_ppm(record.molecular_weight)

    if from_unit == "ppm":
        mg_m3 = value * factor
    elif from_unit == "percent":
        mg_m3 = value * PPM_PER_PERCENT * factor
    else:
        mg_m3 = value

    if to_unit == "ppm":
        return mg_m3 / factor
    if to_unit == "percent":
        return mg_m3 / factor / PPM_PER_PERCENT
    return mg_m3


def get_exposure_guidelines(
    chemical: str, lookup: Optional[ChemicalLookup] = None
) -> Optional[Dict[str, Optional[float]]]:
    """Exposure guideline values (ppm) for a chemical, or None if unknown."""
    record = (lookup or BuiltinChemicalLookup()).get(chemical)
    if record is None:
        return None
    return {
        "idlh": record.idlh,
        "aegl1": record.aegl1,
        "aegl2": record.aegl2,
        "aegl3": record.aegl3,
        "erpg1": record.erpg1,
        "erpg2": record.erpg2,
        "erpg3": record.erpg3,
    }


def get_threshold_descriptions() -> Dict[str, str]:
    """Plain-language meaning of each exposure guideline."""
    return {
        "idlh": "Immediately Dangerous to Life or Health",
        "aegl1": "Notable discomfort, irritation, or non-sensory effects. Effects are "
                 "not disabling and are reversible upon cessation of exposure.",
        "aegl2": "Irreversible or other serious, long-lasting adverse health effects "
                 "or an impaired ability to escape.",
        "aegl3": "Life-threatening health effects or death.",
        "erpg1": "Maximum concentration with mild, transient health effects.",
        "erpg2": "Maximum concentration below which most could be exposed up to 1 hour "
                 "without serious health effects.",
        "erpg3": "Maximum concentration below which most could be exposed up to 1 hour "
                 "without life-threatening health effects.",
    }
