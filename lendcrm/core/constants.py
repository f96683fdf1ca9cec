"""Core constants: backend defaults and shared literal values."""

# Record store accessor defaults (overridable per accessor and via settings)
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_MS = 1000
DEFAULT_CACHE_TTL_SECONDS = 300.0  # 5 minutes

# Paging
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

# Prefix on every backend-reported error message
DATA_LAYER_ERROR_PREFIX = "Database error: "

# HTTP statuses from the backend that are worth retrying
TRANSIENT_STATUS_CODES = frozenset({408, 425, 429, 500, 502, 503, 504})

# PostgREST: single-object request matched zero (or several) rows
POSTGREST_NO_ROWS_CODE = "PGRST116"

# Borrower CSV export: row field -> column header (order is column order)
BORROWER_EXPORT_COLUMNS: dict[str, str] = {
    "firstname": "First Name",
    "lastname": "Last Name",
    "email": "Email",
    "phone": "Phone",
    "address": "Address",
    "creditscore": "Credit Score",
    "employmentstatus": "Employment Status",
    "monthlyincome": "Monthly Income",
    "loanstatus": "Loan Status",
    "registrationdate": "Registration Date",
}

# Columns matched by the free-text borrower search
BORROWER_SEARCH_COLUMNS = ("firstname", "lastname", "email")

DEFAULT_TENANT_NAME_TEMPLATE = "{email}'s Organization"
