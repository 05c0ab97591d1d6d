"""
Enumeration definitions for the workforce dashboard backend.

All enums inherit from both `str` and `Enum` so they serialize as plain
strings in Pydantic response models.

Fixed lookup tables kept next to their enums:
- CONTRACT_NATURE_CODES: contract label <-> numeric code stored in agent_contract
- SKILL_LEVEL_LABELS: skill level number -> label shown in the skills matrix
- DAY_NAMES: day-of-week labels, Sunday first
"""

from enum import Enum
from typing import Dict, List, Optional


class ContractNature(str, Enum):
    """
    Nature of an agent contract.

    The database stores the numeric code (agent_contract.contract_nature);
    callers filter and read by label. The mapping is bijective.
    """
    CDI = "CDI"
    CDD = "CDD"
    INTERIM = "Intérim"
    ALTERNANCE = "Alternance"
    STAGE = "Stage"
    AUTRE = "Autre"

    @property
    def code(self) -> int:
        return CONTRACT_NATURE_CODES[self]

    @classmethod
    def from_code(cls, code: Optional[int]) -> Optional["ContractNature"]:
        for nature, nature_code in CONTRACT_NATURE_CODES.items():
            if nature_code == code:
                return nature
        return None

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["ContractNature"]:
        if label is None:
            return None
        try:
            return cls(label.strip())
        except ValueError:
            return None


CONTRACT_NATURE_CODES: Dict[ContractNature, int] = {
    ContractNature.CDI: 0,
    ContractNature.CDD: 1,
    ContractNature.INTERIM: 2,
    ContractNature.ALTERNANCE: 3,
    ContractNature.STAGE: 4,
    ContractNature.AUTRE: 5,
}

# Label reported for a code missing from CONTRACT_NATURE_CODES
UNKNOWN_CONTRACT_LABEL = "Inconnu"


class SkillLevel(str, Enum):
    """
    Proficiency level of an agent on an activity.

    0 = no skill recorded, 1 = in training, 2 = acquired, 3 = expert.
    """
    NONE = "Aucun"
    IN_PROGRESS = "En cours"
    ACQUIRED = "Acquis"
    EXPERT = "Expert"

    @classmethod
    def from_level(cls, level: Optional[int]) -> "SkillLevel":
        # Anything above the known range is reported as Expert
        if level is None or level <= 0:
            return cls.NONE
        if level == 1:
            return cls.IN_PROGRESS
        if level == 2:
            return cls.ACQUIRED
        return cls.EXPERT


SKILL_LEVEL_LABELS: List[str] = [level.value for level in SkillLevel]


class ReferenceTable(str, Enum):
    """Lookup tables exposed as {id, name} lists."""
    SITE = "site"
    TEAM = "team"
    GROUP = "agent_group"
    EXPERIENCE = "experience"
    CONTEXT = "context"


class FilterWarningCode(str, Enum):
    """Non-fatal findings produced while normalizing report filters."""
    UNRECOGNIZED_FILTER_VALUE = "unrecognized_filter_value"


class HealthStatus(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


# Day-of-week labels indexed Sunday = 0
DAY_NAMES: List[str] = [
    "Dimanche",
    "Lundi",
    "Mardi",
    "Mercredi",
    "Jeudi",
    "Vendredi",
    "Samedi",
]
