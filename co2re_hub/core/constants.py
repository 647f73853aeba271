"""
Constants for the CO2RE ingestion pipeline.

This module centralizes all magic numbers and configuration values
to make the codebase more maintainable and configurable.
"""

# =============================================================================
# CO2RE SITE
# =============================================================================

CO2RE_BASE_URL = "https://co2re.org"

# WordPress REST API root
CO2RE_API_BASE = f"{CO2RE_BASE_URL}/wp-json/wp/v2"

# Index page scanned for extra publication links
CO2RE_PUBLICATIONS_URL = f"{CO2RE_BASE_URL}/publications/"


# =============================================================================
# DOCUMENT PIPELINE
# =============================================================================

# Posts requested per WordPress API page
API_BATCH_SIZE = 50

# Hard cap on API pages (500 documents max)
API_MAX_PAGES = 10

# Maximum links followed from the publications index
MAX_PUBLICATION_LINKS = 20

# Excerpt length before truncation
EXCERPT_LENGTH = 200


# =============================================================================
# RATE LIMITING (milliseconds)
# =============================================================================

# Pause after each WordPress API page
API_PAGE_DELAY_MS = 100

# Pause after each seed page
SEED_PAGE_DELAY_MS = 200

# Pause after each publication link
PUBLICATION_LINK_DELAY_MS = 150

# Pause after each funder / portal
FUNDER_DELAY_MS = 1000


# =============================================================================
# SCRAPING - HTTP/Network
# =============================================================================

# Request timeout in seconds
REQUEST_TIMEOUT = 15

# User-Agent header (browser-like to avoid blocking)
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-GB,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

# Maximum PDF size accepted for text extraction
MAX_PDF_BYTES = 50 * 1024 * 1024


# =============================================================================
# RETRY CONFIGURATION
# =============================================================================

# Maximum number of retry attempts
MAX_RETRIES = 3

# Backoff factor for exponential backoff (delay = backoff_factor * (2 ** attempt))
BACKOFF_FACTOR = 2

# HTTP status codes that should trigger a retry
RETRY_STATUS_CODES = [429, 500, 502, 503, 504]


# =============================================================================
# MONITORING
# =============================================================================

# Number of failures before a source is flagged for manual review
FAILURE_THRESHOLD = 3

# Maximum failed sources to keep in memory
MAX_FAILED_SOURCES = 1000

# Success rate (percent) below which a run raises an alert
ALERT_SUCCESS_RATE = 95

ERROR_SOURCE_UNREACHABLE = "source_unreachable"
ERROR_PARSE_FAILURE = "parse_failure"
ERROR_PERSISTENCE_FAILURE = "persistence_failure"


# =============================================================================
# CLASSIFICATION
# =============================================================================

# Rough maximum category score used to turn scores into percentages
MAX_CATEGORY_SCORE = 20

# Confidence never reported below this once a category is chosen
MIN_CONFIDENCE = 50

MAX_THEMES = 5
MAX_TAGS = 8

DEFAULT_THEME = "Carbon Removal"
DEFAULT_TAG = "carbon-removal"

# Starting point of the additive relevance score
BASE_RELEVANCE_SCORE = 50


# =============================================================================
# PLACEHOLDERS
# =============================================================================

DEFAULT_AUTHOR = "CO2RE Team"
DEFAULT_CONTACT = "See website for contact details"
DEFAULT_THESIS = "Focused on climate solutions and carbon removal technologies"
SCRAPED_PLACEHOLDER_DESCRIPTION = "Scraped opportunity - requires manual review"


# =============================================================================
# MATCH SCORING
# =============================================================================

MATCH_STAGE_POINTS = 30
MATCH_FOCUS_AREA_POINTS = 20
MATCH_LOCATION_POINTS = 20
MATCH_FUNDING_TYPE_POINTS = 15
MAX_MATCH_SCORE = 100

# Locations that earn the location bonus
MATCH_LOCATIONS = ("United Kingdom", "Global")


# =============================================================================
# STORAGE
# =============================================================================

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE = "co2re_hub"
DOCUMENTS_COLLECTION = "documents"
FUNDING_COLLECTION = "funding_opportunities"

# Row limits used by the read paths
DOCUMENT_LIST_LIMIT = 100
DOCUMENT_SEARCH_LIMIT = 50
FUNDING_LIST_LIMIT = 50
TOP_MATCHES_LIMIT = 10
