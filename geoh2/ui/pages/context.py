from __future__ import annotations

from dataclasses import dataclass, field

from geoh2.data.models import Dataset
from geoh2.data.scenario import ScenarioConfig
from geoh2.ui.utils.colors import DEFAULT_MAPPER, ColorMapper


@dataclass
class PageContext:
    dataset: Dataset
    scenario: ScenarioConfig
    mapper: ColorMapper = field(default=DEFAULT_MAPPER)
