from .registry import NodeCatalog, default_catalog, validate_spec

__all__ = ['NodeCatalog', 'default_catalog', 'validate_spec']
