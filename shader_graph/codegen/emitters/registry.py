# Emitter Registry
# Maps node type id -> emitter function

from typing import Callable, Dict, Optional

from ...config import CompilerConfig, DEFAULT_CONFIG
from ...ir.graph import NodeSpec
from .audio import emit_audio_analyzer, emit_audio_file
from .swizzle import emit_swizzle
from .template import emit_nothing, emit_template

# Emitter signature: (ctx: NodeContext) -> Optional[str]
# None means the node emits no block at all.
EmitterType = Callable[[object], Optional[str]]


# Node types with hand-written emitters; everything else uses its template
EMITTER_REGISTRY: Dict[str, EmitterType] = {
    'swizzle': emit_swizzle,
}


def get_emitter(spec: NodeSpec, config: CompilerConfig = DEFAULT_CONFIG) -> EmitterType:
    """Get the emitter for a node spec. Never None: falls back to the template emitter."""
    if spec.id == config.sink_node_type:
        return emit_nothing
    if spec.category == config.audio_category:
        if spec.id == config.audio_file_node_type:
            return emit_audio_file
        if spec.id == config.audio_analyzer_node_type:
            return emit_audio_analyzer
    return EMITTER_REGISTRY.get(spec.id, emit_template)


__all__ = ['EMITTER_REGISTRY', 'get_emitter']
