"""Constants for the recipe graph extraction engine."""

# Vocabulary IRIs
SCHEMA_ORG = "https://schema.org/"
# Older pages still publish the plain-http prefix; it is rewritten on load.
SCHEMA_ORG_HTTP = "http://schema.org/"
RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDF_TYPE = RDF + "type"
XSD = "http://www.w3.org/2001/XMLSchema#"
XSD_STRING = XSD + "string"
XSD_INTEGER = XSD + "integer"
XSD_DOUBLE = XSD + "double"
XSD_BOOLEAN = XSD + "boolean"
RDF_LANG_STRING = RDF + "langString"

# Fetch defaults
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_RESPONSE_SIZE = 10 * 1024 * 1024  # 10 MB
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_MAX_RETRIES = 3
DEFAULT_CHUNK_SIZE = 8192
DEFAULT_USER_AGENT = "recipe-graph (+https://pypi.org/project/recipe-graph/)"

ALLOWED_CONTENT_TYPES = (
    "text/html",
    "application/xhtml",
    "application/xml",
    "application/ld+json",
)

JSONLD_SCRIPT_TYPE = "application/ld+json"

# Environment overrides read by the CLI
ENV_USER_AGENT = "RECIPE_GRAPH_USER_AGENT"
ENV_TIMEOUT = "RECIPE_GRAPH_TIMEOUT"

# Output formats
FORMAT_JSON = "json"
FORMAT_NTRIPLES = "ntriples"
OUTPUT_FORMATS = [FORMAT_JSON, FORMAT_NTRIPLES]

# Render lengths
LENGTH_LONG = "long"
LENGTH_ABBREV = "abbrev"
