"""
Fixed values for the Factiva snapshot, extraction and taxonomy endpoints.

Base paths are relative to ``API_HOST``; field lists describe how extracted
article records are normalised.
"""

API_HOST = "https://api.dowjones.com"

# Snapshots
API_SNAPSHOTS_BASEPATH = "/alpha/extractions/documents"
API_EXPLAIN_SUFFIX = "/_explain"
API_ANALYTICS_BASEPATH = "/alpha/analytics"
API_EXTRACTIONS_BASEPATH = "/alpha/extractions"

API_SNAPSHOTS_TAXONOMY_BASEPATH = "/alpha/taxonomies"
API_SNAPSHOTS_COMPANIES_BASEPATH = "/alpha/companies"

# Request dispatch
REQUEST_DEFAULT_TYPE = "json"
REQUEST_STREAM_TYPE = "stream"
RESPONSE_TYPES = (REQUEST_DEFAULT_TYPE, REQUEST_STREAM_TYPE)
ALLOWED_METHODS = ("GET", "POST", "DELETE")
DEFAULT_STREAM_FILE = "./tmp.csv"
USER_KEY_HEADER = "user-key"

API_EXTRACTION_FILE_FORMATS = ["avro", "csv", "json"]

# Article record fields
TIMESTAMP_FIELDS = [
    "publication_date",
    "publication_datetime",
    "modification_date",
    "modification_datetime",
    "ingestion_datetime",
    "availability_datetime",
]
DELIVERY_DATETIME_FIELD = "delivery_datetime"

MULTIVALUE_FIELDS_SPACE = ["region_of_origin"]
MULTIVALUE_FIELDS_COMMA = [
    "company_codes",
    "company_codes_about",
    "company_codes_association",
    "company_codes_lineage",
    "company_codes_occur",
    "company_codes_relevance",
    "subject_codes",
    "region_codes",
    "industry_codes",
    "person_codes",
    "currency_codes",
    "market_index_codes",
]


def build_url(base_path: str, *segments: str, host: str = API_HOST) -> str:
    """Join host, base path and extra path segments with single slashes."""
    parts = [host.rstrip("/"), base_path.strip("/")]
    parts.extend(str(segment).strip("/") for segment in segments)
    return "/".join(part for part in parts if part)
