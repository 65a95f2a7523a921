"""Common literal values used across content_router.

These constants pin the entry wire format (metadata keys, the asset marker)
and the output format names so the router, the transform driver and the file
writer agree without drifting. Intended for internal use within the
content_router package.

Examples
--------
>>> from content_router import _constants
>>> _constants.METADATA_KEY
'__metadata'
>>> _constants.DATE_PREFIX_LENGTH
10
"""

METADATA_KEY = "__metadata"
ASSET_MODEL_NAME = "__asset"
ASSET_URL_KEY = "url"

MODEL_NAME_KEY = "modelName"
PROJECT_ID_KEY = "projectId"
SOURCE_KEY = "source"
CREATED_AT_KEY = "createdAt"

FORMAT_FRONTMATTER_MD = "frontmatter-md"
FORMAT_JSON = "json"
FORMAT_YAML = "yml"
DATA_FORMATS = (FORMAT_JSON, FORMAT_YAML)

PAGE_EXTENSION = ".md"
DATE_PREFIX_LENGTH = 10
EXAMPLE_MAX_LENGTH = 60
