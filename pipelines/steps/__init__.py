# Namespace for pipeline steps
from .collect_companies import CollectCompanies  # noqa: F401
from .enrich_companies import EnrichAndStreamCompanies  # noqa: F401
