# SPDX-License-Identifier: Apache-2.0
"""Static zone-to-advice lookup shown next to the dominant zone."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from pydantic import BaseModel


class Recommendation(BaseModel):
    cause: str
    advice: str


RECOMMENDATIONS: Dict[str, Dict[str, str]] = {
    "forehead": {
        "cause": "Stress, Sleep, Digestion",
        "advice": "Try to get more sleep (7-8 hours). Drink more water to aid digestion. "
        "Reduce processed sugar intake.",
    },
    "cheeks": {
        "cause": "Respiratory, Pollution, Bacteria",
        "advice": "Clean your phone screen and pillowcases. Spend time in fresh air if possible. "
        "Avoid touching your face.",
    },
    "chin": {
        "cause": "Hormonal Imbalance",
        "advice": "Monitor your cycle. Reduce stress levels as cortisol spikes can trigger "
        "breakouts here. Eating leafy greens may help.",
    },
    "nose": {
        "cause": "Heart, Blood Pressure",
        "advice": "Check your blood pressure. Reduce spicy foods and salt. "
        "Eat more 'cooling' foods like cucumber.",
    },
}


def recommend(
    zone: Optional[str], table: Mapping[str, Mapping[str, str]] = RECOMMENDATIONS
) -> Optional[Recommendation]:
    if zone is None or zone not in table:
        return None
    return Recommendation(**table[zone])
