# SPDX-License-Identifier: Apache-2.0
"""Facial zone redness analysis."""

from __future__ import annotations

from skinzones.analyze.engine import AnalysisResult, analyze, analyze_zones

__all__ = ["AnalysisResult", "analyze", "analyze_zones"]
__version__ = "0.1.0"
