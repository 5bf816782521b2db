# tracedoc/renderers/registry.py
from __future__ import annotations

from typing import Dict, List, Type

from tracedoc.renderers.base import Renderer
from tracedoc.renderers.charts import MetricsChartRenderer
from tracedoc.renderers.diagrams import SequenceDiagramRenderer, StateDiagramRenderer
from tracedoc.renderers.facts import FactsListRenderer, FactsTableRenderer
from tracedoc.renderers.properties import PropertiesRenderer, PropertyRenderer
from tracedoc.renderers.specs import AlloySpecRenderer, TlaSpecRenderer
from tracedoc.utils.errors import UnknownDirectiveError


class RendererRegistry:
    """
    RendererRegistry (FINAL / FROZEN)

    Directive name -> Renderer

    All renderers are registered explicitly in _REGISTRY.

    No dynamic discovery or side-effect-based registration is allowed.

    Adding a directive requires a deliberate code change here.
    """

    _REGISTRY: Dict[str, Type[Renderer]] = {
        StateDiagramRenderer.name: StateDiagramRenderer,
        SequenceDiagramRenderer.name: SequenceDiagramRenderer,
        PropertyRenderer.name: PropertyRenderer,
        PropertiesRenderer.name: PropertiesRenderer,
        FactsTableRenderer.name: FactsTableRenderer,
        FactsListRenderer.name: FactsListRenderer,
        MetricsChartRenderer.name: MetricsChartRenderer,
        TlaSpecRenderer.name: TlaSpecRenderer,
        AlloySpecRenderer.name: AlloySpecRenderer,
    }

    @classmethod
    def create(cls, name: str) -> Renderer:
        """
        冻结规则：
          - 未注册 name -> UnknownDirectiveError（由 assembler 渲染为诊断）
        """
        if name not in cls._REGISTRY:
            raise UnknownDirectiveError(name)
        return cls._REGISTRY[name]()

    @classmethod
    def names(cls) -> List[str]:
        return sorted(cls._REGISTRY)
