"""Family Graph - genealogical ancestry graph engine.

Query-time algorithms over a person/parent-link projection: pedigrees,
descendancy trees, Ahnentafel numbering and kinship naming.
"""

__version__ = "0.1.0"

# Lazy imports to avoid circular dependencies
def __getattr__(name: str):
    if name == "models":
        from family_graph import models
        return models
    if name == "readmodel":
        from family_graph import readmodel
        return readmodel
    if name == "engine":
        from family_graph import engine
        return engine
    if name == "query":
        from family_graph import query
        return query
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
