import random
import string
from typing import Any

MOCK_DATA_SAMPLE: list[dict[str, Any]] = [
    {"name": "Group A", "value": 400, "pv": 2400, "amt": 2400},
    {"name": "Group B", "value": 300, "pv": 1398, "amt": 2210},
    {"name": "Group C", "value": 200, "pv": 9800, "amt": 2290},
    {"name": "Group D", "value": 278, "pv": 3908, "amt": 2000},
    {"name": "Group E", "value": 189, "pv": 4800, "amt": 2181},
]


def simulate_extraction(rng: random.Random | None = None) -> list[dict[str, Any]]:
    """Simulate running an extraction query against the clinical data warehouse."""
    rng = rng or random.Random()
    alphabet = string.ascii_lowercase + string.digits

    return [
        {
            **row,
            "id": "".join(rng.choices(alphabet, k=6)),
            "diagnosis_code": f"ICD10-{rng.randrange(100)}",
            "hba1c": f"{rng.uniform(5, 10):.1f}",
        }
        for row in MOCK_DATA_SAMPLE
    ]
