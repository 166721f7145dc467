"""
CardRanker services.

Catalog loading, grade persistence, the ranking session and the
transfer codec.
"""

from cardranker.services.blob_store import (
    BlobStore,
    BlobStoreError,
    MemoryBlobStore,
    SqlBlobStore,
)
from cardranker.services.catalog import (
    Catalog,
    fetch_catalog,
    load_catalog,
    load_catalog_file,
    parse_catalog,
)
from cardranker.services.grade_entry import GradeEntry
from cardranker.services.grade_store import (
    GradeStoreRepository,
    StoreParseError,
    StorePersistError,
    parse_grade_blob,
)
from cardranker.services.ranking import (
    Direction,
    RankingSession,
    Transition,
    assign_grade,
    jump_to,
    navigate,
    set_display_mode,
    set_filter,
    set_sort,
    toggle_unranked_only,
)
from cardranker.services.transfer import (
    export_store,
    export_with_confirmation,
    import_store,
)

__all__ = [
    # Storage
    "BlobStore",
    "BlobStoreError",
    "GradeStoreRepository",
    "MemoryBlobStore",
    "SqlBlobStore",
    "StoreParseError",
    "StorePersistError",
    "parse_grade_blob",
    # Catalog
    "Catalog",
    "fetch_catalog",
    "load_catalog",
    "load_catalog_file",
    "parse_catalog",
    # Ranking
    "Direction",
    "GradeEntry",
    "RankingSession",
    "Transition",
    "assign_grade",
    "jump_to",
    "navigate",
    "set_display_mode",
    "set_filter",
    "set_sort",
    "toggle_unranked_only",
    # Transfer
    "export_store",
    "export_with_confirmation",
    "import_store",
]
