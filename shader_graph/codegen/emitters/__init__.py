from .registry import EMITTER_REGISTRY, get_emitter
from .swizzle import normalize_swizzle, swizzle_expression

__all__ = ['EMITTER_REGISTRY', 'get_emitter', 'normalize_swizzle', 'swizzle_expression']
