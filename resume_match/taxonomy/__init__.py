from functools import lru_cache

from resume_match.core.config import settings

from .local_taxonomy import LocalTaxonomy
from .provider import TaxonomyProvider


@lru_cache(maxsize=1)
def get_default_taxonomy_provider() -> TaxonomyProvider:
    """Shared vocabulary for engines built without an explicit taxonomy.

    ``TAXONOMY_PATH`` points at a replacement vocabulary.json; it is read once.
    """
    return LocalTaxonomy(settings.taxonomy_path)


__all__ = ["LocalTaxonomy", "TaxonomyProvider", "get_default_taxonomy_provider"]
