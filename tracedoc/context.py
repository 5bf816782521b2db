#!filepath: tracedoc/context.py
from __future__ import annotations

from dataclasses import dataclass, field

from tracedoc.config.render_config import RenderConfig
from tracedoc.store.interface import ActorRegistry, FactStore


@dataclass(frozen=True)
class RenderContext:
    """
    RenderContext = 一次渲染 pass 的唯一上下文（只读语义）

    设计原则：
    - DocumentAssembler 负责构造（store 为本次 pass 的 snapshot）
    - Renderer 只读，不修改 trace
    - 不放业务逻辑
    """

    store: FactStore
    actors: ActorRegistry
    config: RenderConfig = field(default_factory=RenderConfig)
