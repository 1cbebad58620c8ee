"""Common literal values used across pdxdoc.

These constants keep identity namespaces, file extensions and layout
thresholds centralized so pages, the site mapper and tests agree on them.

Examples
--------
>>> from pdxdoc import _constants
>>> _constants.PAGE_EXTENSION
'html'
>>> _constants.SCOPE_ID_TEMPLATE.format(name="country")
'scope_country'
"""

VERSION = "0.1.0"
GENERATOR_LABEL = f"pdxdoc {VERSION}"

PAGE_EXTENSION = "html"
INDEX_FILENAME = f"index.{PAGE_EXTENSION}"
ASSETS_DIR = "assets"
STYLESHEET_NAME = "style.css"

DEFAULT_PAGE_LIMIT = 50
# Arrays declared shorter than this render on a single line.
INLINE_ARRAY_THRESHOLD = 4
# Mask listings only paginate once they hold more modifiers than this.
MASK_PAGINATION_FLOOR = 4

SCOPE_ID_TEMPLATE = "scope_{name}"
MASK_ID_TEMPLATE = "mask_{name}"
MASK_GROUP_TEMPLATE = "modifiers_{name}"
SCOPES_INDEX_KEY = "SCOPES_INDEX"
MODIFIERS_INDEX_KEY = "MODIFIERS_INDEX"
