from .uniforms import UniformMetadata, allocate_uniforms, find_used_uniforms, uniform_metadata
from .specialization import plan_function_specialization, plan_for_state

__all__ = [
    'UniformMetadata', 'allocate_uniforms', 'find_used_uniforms', 'uniform_metadata',
    'plan_function_specialization', 'plan_for_state',
]
